"""
Name: Ad Routes

Responsibilities:
  - Publish ads for authenticated users
  - List ads publicly, and with ownership flags for authenticated users

Collaborators:
  - application.use_cases: PublishAdUseCase, ListAdsUseCase
  - application.list_options: query parameter parsing
  - api.ad_responses: response assembly
  - auth_users.require_identity: bearer token gate

Notes:
  - /ads and /ads/ are distinct routes: only the trailing-slash form is gated
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from ..application.list_options import parse_list_options
from ..application.use_cases import ListAdsUseCase, PublishAdInput, PublishAdUseCase
from ..auth_users import require_identity
from ..container import get_list_ads_use_case, get_publish_ad_use_case
from ..domain.entities import Identity
from ..error_responses import internal_error
from ..exceptions import UserNotFoundError
from .ad_responses import AdResponse, build_ad_responses

router = APIRouter(tags=["ads"])


class AdRequest(BaseModel):
    title: str = ""
    text: str = ""
    image_url: str = ""
    price: float = 0.0


@router.post(
    "/publish",
    status_code=201,
    response_model=AdResponse,
    response_model_exclude_none=True,
)
def publish_ad(
    req: AdRequest,
    identity: Identity = Depends(require_identity()),
    use_case: PublishAdUseCase = Depends(get_publish_ad_use_case),
):
    """
    R: Publish an ad authored by the caller.

    Errors:
        400: Field rules or image check failed
        401: Missing or invalid bearer token
        500: Token names a user that no longer exists, or storage failed
    """
    data = PublishAdInput(
        title=req.title,
        text=req.text,
        image_url=req.image_url,
        price=req.price,
    )
    try:
        ad = use_case.execute(author_id=identity.user_id, data=data)
    except UserNotFoundError as exc:
        raise internal_error(exc.message) from exc
    return AdResponse.from_ad(ad)


@router.get(
    "/ads",
    response_model=list[AdResponse],
    response_model_exclude_none=True,
)
def list_ads(
    request: Request,
    use_case: ListAdsUseCase = Depends(get_list_ads_use_case),
):
    """R: Public listing; ownership is never reported."""
    options = parse_list_options(request.query_params)
    return build_ad_responses(use_case.execute(options))


@router.get(
    "/ads/",
    response_model=list[AdResponse],
    response_model_exclude_none=True,
)
def list_ads_for_viewer(
    request: Request,
    identity: Identity = Depends(require_identity()),
    use_case: ListAdsUseCase = Depends(get_list_ads_use_case),
):
    """R: Authenticated listing; every ad carries is_owner."""
    options = parse_list_options(request.query_params)
    return build_ad_responses(use_case.execute(options), viewer_id=identity.user_id)
