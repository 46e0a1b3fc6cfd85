"""
Name: Domain Service Interfaces

Responsibilities:
  - Define contracts for external collaborators used by the application layer

Collaborators:
  - Implementations in infrastructure.services
"""

from typing import Protocol


class ImageInspector(Protocol):
    """R: Checks that a URL points to a fetchable, supported image."""

    def inspect(self, url: str) -> None:
        """
        R: Fetch and sniff the image behind url.

        Raises:
            ImageFetchError: If the image is unreachable, too large,
                of an unsupported type or undecodable
        """
        ...
