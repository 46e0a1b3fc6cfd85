"""Application use cases."""

from .get_user import GetUserUseCase
from .list_ads import ListAdsUseCase
from .login_user import LoginUserUseCase
from .publish_ad import PublishAdInput, PublishAdUseCase
from .register_user import RegisterUserUseCase

__all__ = [
    "GetUserUseCase",
    "ListAdsUseCase",
    "LoginUserUseCase",
    "PublishAdInput",
    "PublishAdUseCase",
    "RegisterUserUseCase",
]
