"""Google Play Movies Partner API v1: client library and ``playmoviespartner1`` tool."""

from apiary.apis.playmoviespartner1.api import (
    AccountMethods,
    Avail,
    ListAvailsResponse,
    ListOrdersResponse,
    ListStoreInfosResponse,
    Order,
    PlayMovies,
    Scope,
    StoreInfo,
)

__all__ = [
    "AccountMethods",
    "Avail",
    "ListAvailsResponse",
    "ListOrdersResponse",
    "ListStoreInfosResponse",
    "Order",
    "PlayMovies",
    "Scope",
    "StoreInfo",
]
