"""
Name: Domain Entities

Responsibilities:
  - Define core entities (User, Author, Ad) and listing options
  - Hold the listing constants (sort fields, directions, limits)

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Ads are immutable once created

Notes:
  - Author is a snapshot of the user taken when the ad is published; it is
    never refreshed from the users store
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4


SORT_BY_CREATED_AT = "created_at"
SORT_BY_PRICE = "price"
SORT_FIELDS = (SORT_BY_CREATED_AT, SORT_BY_PRICE)

ORDER_BY_ASC = 1
ORDER_BY_DESC = -1

LIMIT_DEFAULT_VALUE = 10
LIMIT_MAX_VALUE = 40

PARAM_PAGE = "page"
PARAM_LIMIT = "limit"
PARAM_SORT_BY = "sort_by"
PARAM_ORDER_BY = "order_by"
PARAM_MIN_PRICE = "min_price"
PARAM_MAX_PRICE = "max_price"


@dataclass
class User:
    """
    R: Registered marketplace user.

    Attributes:
        id: Unique user identifier
        username: Unique login name, immutable after registration
        password_hash: Argon2 hash of the password
        created_at: Registration timestamp (set by the store)
    """

    id: UUID
    username: str
    password_hash: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class Author:
    """R: Denormalized copy of the publishing user (id + username)."""

    id: UUID
    username: str

    @classmethod
    def from_user(cls, user: User) -> "Author":
        return cls(id=user.id, username=user.username)


@dataclass(frozen=True)
class Ad:
    """
    R: Published advertisement.

    Attributes:
        id: Unique ad identifier
        title: Short headline
        text: Free-text body
        image_url: URL of the ad image (checked at publish time)
        price: Positive price
        author: Snapshot of the publishing user
        created_at: Server-assigned UTC creation timestamp
    """

    id: UUID
    title: str
    text: str
    image_url: str
    price: float
    author: Author
    created_at: datetime

    @classmethod
    def new(
        cls, *, title: str, text: str, image_url: str, price: float, user: User
    ) -> "Ad":
        """R: Build a fresh ad authored by user."""
        return cls(
            id=uuid4(),
            title=title,
            text=text,
            image_url=image_url,
            price=price,
            author=Author.from_user(user),
            created_at=datetime.now(timezone.utc),
        )


@dataclass
class ListOptions:
    """
    R: Pagination, sorting and price filter for ad listing.

    A price bound of 0 means "no bound". Page defaults to 0 so that a
    request without an explicit page fails validation.
    """

    page: int = 0
    limit: int = LIMIT_DEFAULT_VALUE
    sort_by: str = SORT_BY_CREATED_AT
    order_by: int = ORDER_BY_DESC
    min_price: float = 0.0
    max_price: float = 0.0

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def ascending(self) -> bool:
        return self.order_by == ORDER_BY_ASC

    @property
    def sort_field(self) -> str:
        """R: Effective sort field; anything but price sorts by creation time."""
        return SORT_BY_PRICE if self.sort_by == SORT_BY_PRICE else SORT_BY_CREATED_AT


@dataclass(frozen=True)
class Identity:
    """R: Verified caller identity extracted from a session token."""

    user_id: UUID
    username: str = ""
