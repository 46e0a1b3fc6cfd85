"""
Name: List Ads Use Case

Responsibilities:
  - Fetch one page of ads for validated ListOptions

Collaborators:
  - domain.repositories.AdRepository
  - application.list_options (builds the options)

Notes:
  - An empty page is an AdsNotFoundError, not an empty success
"""

from typing import List

from ...domain.entities import Ad, ListOptions
from ...domain.repositories import AdRepository
from ...exceptions import AdsNotFoundError


class ListAdsUseCase:
    """R: List ads under pagination, sorting and price filters."""

    def __init__(self, repository: AdRepository):
        self.repository = repository

    def execute(self, options: ListOptions) -> List[Ad]:
        ads = self.repository.find_all(options)
        if not ads:
            raise AdsNotFoundError()
        return ads
