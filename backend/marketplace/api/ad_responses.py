"""
Name: Ad Response Assembler

Responsibilities:
  - Turn stored ads into the public response shape
  - Mark ads owned by the authenticated viewer

Collaborators:
  - domain.entities.Ad
  - api.ad_routes: serializes these with exclude_none

Notes:
  - is_owner stays None (and is omitted) unless a viewer is known
"""

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel

from ..domain.entities import Ad


class AdResponse(BaseModel):
    title: str
    text: str
    image_url: str
    price: float
    username: str
    is_owner: Optional[bool] = None
    created_at: datetime

    @classmethod
    def from_ad(cls, ad: Ad) -> "AdResponse":
        return cls(
            title=ad.title,
            text=ad.text,
            image_url=ad.image_url,
            price=ad.price,
            username=ad.author.username,
            created_at=ad.created_at,
        )

    def process_owner(self, ad: Ad, viewer_id: UUID) -> "AdResponse":
        """R: Set is_owner by comparing the ad author with the viewer."""
        self.is_owner = ad.author.id == viewer_id
        return self


def build_ad_responses(
    ads: Iterable[Ad], viewer_id: Optional[UUID] = None
) -> List[AdResponse]:
    responses = []
    for ad in ads:
        response = AdResponse.from_ad(ad)
        if viewer_id is not None:
            response.process_owner(ad, viewer_id)
        responses.append(response)
    return responses
