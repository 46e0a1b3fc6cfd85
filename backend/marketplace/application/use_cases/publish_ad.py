"""
Name: Publish Ad Use Case

Responsibilities:
  - Check the ad fields against the field rules
  - Check that image_url points to a supported image
  - Snapshot the author and persist the ad

Collaborators:
  - domain.repositories.AdRepository
  - use_cases.get_user.GetUserUseCase (author lookup)
  - domain.services.ImageInspector
  - application.validation (AdFields)

Notes:
  - All field failures are reported together; the image check only runs
    when image_url itself passed its rules
"""

from dataclasses import asdict, dataclass
from uuid import UUID

from pydantic import ValidationError

from ...domain.entities import Ad
from ...domain.repositories import AdRepository
from ...domain.services import ImageInspector
from ...exceptions import FieldValidationError, ImageFetchError
from ...logger import logger
from ..validation import AdFields, field_errors
from .get_user import GetUserUseCase

IMAGE_URL_FIELD = "image_url"


@dataclass(frozen=True)
class PublishAdInput:
    """R: Ad fields as submitted by the client."""

    title: str
    text: str
    image_url: str
    price: float


class PublishAdUseCase:
    """R: Validate and store a new ad authored by the caller."""

    def __init__(
        self,
        repository: AdRepository,
        get_user: GetUserUseCase,
        image_inspector: ImageInspector,
    ):
        self.repository = repository
        self.get_user = get_user
        self.image_inspector = image_inspector

    def execute(self, *, author_id: UUID, data: PublishAdInput) -> Ad:
        errors: dict[str, str] = {}
        try:
            AdFields.model_validate(asdict(data))
        except ValidationError as exc:
            errors = field_errors(exc)

        if IMAGE_URL_FIELD not in errors:
            try:
                self.image_inspector.inspect(data.image_url)
            except ImageFetchError as exc:
                errors[IMAGE_URL_FIELD] = exc.message
        if errors:
            raise FieldValidationError(errors)

        user = self.get_user.execute(author_id)

        ad = Ad.new(
            title=data.title,
            text=data.text,
            image_url=data.image_url,
            price=data.price,
            user=user,
        )
        self.repository.save(ad)

        logger.info(
            "Ad published",
            extra={"ad_id": str(ad.id), "author_id": str(user.id)},
        )
        return ad
