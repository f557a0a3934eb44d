"""Contact mount: contact form submission."""
import asyncio
from typing import Optional

from storefront.api import StorefrontAPI, describe_submission_error
from storefront.config import VALIDATION_NOTIFICATION_MS
from storefront.errors import ERROR_SERVER_PROBLEM, SubmissionInProgress
from storefront.forms import ContactDetails, ContactRequest
from storefront.guard import SubmissionGuard
from storefront.logging import get_logger

from .base import Mount, Render

logger = get_logger(__name__)

MESSAGE_SENT = (
    "Thank you {name}! Your message has been sent successfully. "
    "We'll get back to you soon! 📧"
)


class ContactMount(Mount):
    name = "contact"

    def __init__(
        self,
        api: StorefrontAPI,
        render: Optional[Render] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        super().__init__(render, loop)
        self.api = api
        self.details = ContactDetails()
        self.guard = SubmissionGuard(on_change=lambda _: self._changed())

    @property
    def is_loading(self) -> bool:
        return self.guard.submitting

    async def submit(self) -> bool:
        """
        Validate and send the contact message.

        Returns:
            True if the message was accepted, False otherwise
        """
        if self.guard.submitting:
            logger.info("Contact submission ignored: already in progress")
            return False

        issue = self.details.validate_form()
        if issue is not None:
            self.notifications.enqueue(issue.message, issue.kind, VALIDATION_NOTIFICATION_MS)
            return False

        payload = ContactRequest.build(self.details).to_payload()
        try:
            with self.guard.hold():
                response = await self.api.submit_contact(payload)
        except SubmissionInProgress:
            logger.info("Contact submission ignored: already in progress")
            return False
        except Exception as e:
            logger.error(f"Contact submission failed: {e}", exc_info=True)
            self.notifications.show_error(describe_submission_error(e), VALIDATION_NOTIFICATION_MS)
            return False

        if response.status_code != 200:
            logger.error(f"Contact submission returned status {response.status_code}")
            self.notifications.show_error(ERROR_SERVER_PROBLEM, VALIDATION_NOTIFICATION_MS)
            return False

        name = self.details.name
        self.details.reset()
        self.notifications.show_success(MESSAGE_SENT.format(name=name), 5000)
        return True
