"""Cart models: catalog-derived lines with defensive Decimal pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

from storefront.errors import CartPositionError
from storefront.money import multiply, round_money, to_decimal

# Keys a catalog record may use for its identity, in lookup order
PRODUCT_ID_KEYS = ("product_id", "_id", "id")
IMAGE_KEYS = ("image1", "image2", "image3")

_LINE_KEYS = {"name", "price", "quantity"}


def _parse_quantity(value: Any) -> int:
    """Quantity must be a whole number >= 1."""
    if value is None:
        return 1
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Invalid quantity: {value!r}")
        value = int(value)
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid quantity: {value!r}")
    if quantity < 1:
        raise ValueError(f"Quantity must be at least 1, got {quantity}")
    return quantity


@dataclass
class CartLine:
    """
    One product instance in the cart.

    ``extra`` holds the rest of the catalog record verbatim, identity keys
    included, so the stored line and the order payload carry the product
    exactly as the catalog served it.
    """
    name: str
    price: Any  # Raw catalog value; coerced only when pricing
    quantity: int = 1
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"Quantity must be at least 1, got {self.quantity}")
        # Keep the stored value JSON-friendly
        if isinstance(self.price, Decimal):
            self.price = str(self.price)

    @property
    def product_id(self) -> Optional[str]:
        """Catalog identity from ``product_id``, ``_id`` or ``id``."""
        for key in PRODUCT_ID_KEYS:
            value = self.extra.get(key)
            if value is not None:
                return str(value)
        return None

    @property
    def unit_price(self) -> Decimal:
        """Price per unit; malformed or missing prices count as 0."""
        return to_decimal(self.price)

    @property
    def line_total(self) -> Decimal:
        return multiply(self.unit_price, self.quantity)

    @property
    def images(self) -> List[str]:
        return [self.extra[key] for key in IMAGE_KEYS if self.extra.get(key)]

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity, extra=dict(self.extra))

    def to_dict(self) -> dict:
        """Convert to dictionary for storage: the catalog record plus quantity."""
        data = dict(self.extra)
        data["name"] = self.name
        data["price"] = self.price
        data["quantity"] = self.quantity
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """
        Create from a stored line or a catalog record.

        Raises:
            ValueError: If the record is not a mapping or its quantity is invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Cart line must be an object, got {type(data).__name__}")

        return cls(
            name=str(data.get("name") or ""),
            price=data.get("price"),
            quantity=_parse_quantity(data.get("quantity")),
            extra={k: v for k, v in data.items() if k not in _LINE_KEYS},
        )

    @classmethod
    def from_product(cls, product: dict) -> "CartLine":
        """Build a fresh line (quantity 1 unless the record says otherwise) from a catalog record."""
        return cls.from_dict(product)


@dataclass
class Cart:
    """Insertion-ordered sequence of cart lines."""
    lines: List[CartLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __getitem__(self, position: int) -> CartLine:
        return self.lines[self._check_position(position)]

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total_items(self) -> int:
        """Total number of units across all lines."""
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        """Sum of unit price x quantity over all lines."""
        return round_money(sum((line.line_total for line in self.lines), Decimal("0")))

    def _check_position(self, position: int) -> int:
        if not isinstance(position, int) or isinstance(position, bool):
            raise TypeError(f"Cart position must be an int, got {type(position).__name__}")
        if position < 0 or position >= len(self.lines):
            raise CartPositionError(position, len(self.lines))
        return position

    def with_line(self, line: CartLine) -> "Cart":
        """New cart with the line appended (duplicates allowed)."""
        return Cart(lines=[*self.lines, line])

    def with_merged_line(self, line: CartLine) -> "Cart":
        """New cart where a line for the same product absorbs the quantity."""
        if line.product_id is not None:
            for position, existing in enumerate(self.lines):
                if existing.product_id == line.product_id:
                    return self.with_quantity(position, existing.quantity + line.quantity)
        return self.with_line(line)

    def without_line(self, position: int) -> "Cart":
        position = self._check_position(position)
        return Cart(lines=self.lines[:position] + self.lines[position + 1:])

    def with_quantity(self, position: int, quantity: int) -> "Cart":
        """New cart with the line's quantity replaced; below 1 removes the line."""
        position = self._check_position(position)
        if quantity < 1:
            return self.without_line(position)
        lines = list(self.lines)
        lines[position] = lines[position].with_quantity(quantity)
        return Cart(lines=lines)

    def to_list(self) -> List[dict]:
        """Convert to a JSON-ready list."""
        return [line.to_dict() for line in self.lines]

    @classmethod
    def from_list(cls, data: Any) -> "Cart":
        """
        Create from a stored list.

        Raises:
            ValueError: If the payload is not a list of valid lines
        """
        if not isinstance(data, list):
            raise ValueError(f"Cart payload must be a list, got {type(data).__name__}")
        return cls(lines=[CartLine.from_dict(item) for item in data])
