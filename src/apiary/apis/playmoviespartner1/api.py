"""Google Play Movies Partner API, version v1.

Gets the delivery status of titles for Google Play Movies Partners. All
operations are read-only and scoped to one partner account.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from apiary.common import CallBuilder, Hub, Schema
from apiary.common.schema import Timestamp


class Scope(str, Enum):
    # View the digital assets you publish on Google Play Movies and TV.
    PLAYMOVIES_PARTNER_READONLY = "https://www.googleapis.com/auth/playmovies_partner.readonly"


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class Avail(Schema):
    """An Avail describes the availability of a title in one territory.

    Its terms (license type, price, dates) follow the EMA Avails
    specification.
    """

    alt_id: Optional[str] = None
    avail_id: Optional[str] = None
    caption_exemption: Optional[str] = None
    caption_included: Optional[bool] = None
    content_id: Optional[str] = None
    display_name: Optional[str] = None
    encode_id: Optional[str] = None
    end: Optional[str] = None
    episode_alt_id: Optional[str] = None
    episode_number: Optional[str] = None
    episode_title_internal_alias: Optional[str] = None
    format_profile: Optional[str] = None
    license_type: Optional[str] = None
    pph_names: Optional[list[str]] = None
    price_type: Optional[str] = None
    price_value: Optional[str] = None
    product_id: Optional[str] = None
    rating_reason: Optional[str] = None
    rating_system: Optional[str] = None
    rating_value: Optional[str] = None
    release_date: Optional[str] = None
    season_alt_id: Optional[str] = None
    season_number: Optional[str] = None
    season_title_internal_alias: Optional[str] = None
    series_alt_id: Optional[str] = None
    series_title_internal_alias: Optional[str] = None
    start: Optional[str] = None
    store_language: Optional[str] = None
    suppression_lift_date: Optional[str] = None
    territory: Optional[str] = None
    title_internal_alias: Optional[str] = None
    video_id: Optional[str] = None
    work_type: Optional[str] = None


class Order(Schema):
    """An Order tracks the fulfillment of an Edit when delivered using the
    legacy, non-component-based delivery.

    Each Order is uniquely identified by an ``order_id``, generated by
    Google. Partners can also identify it by its ``custom_id``, when
    provided.
    """

    approved_time: Optional[Timestamp] = None
    channel_id: Optional[str] = None
    channel_name: Optional[str] = None
    countries: Optional[list[str]] = None
    custom_id: Optional[str] = None
    earliest_avail_start_time: Optional[Timestamp] = None
    episode_name: Optional[str] = None
    legacy_priority: Optional[str] = None
    name: Optional[str] = None
    normalized_priority: Optional[str] = None
    order_id: Optional[str] = None
    ordered_time: Optional[Timestamp] = None
    pph_name: Optional[str] = None
    priority: Optional[float] = None
    received_time: Optional[Timestamp] = None
    rejection_note: Optional[str] = None
    season_name: Optional[str] = None
    show_name: Optional[str] = None
    status: Optional[str] = None
    status_detail: Optional[str] = None
    studio_name: Optional[str] = None
    type_: Optional[str] = Field(default=None, alias="type")
    video_id: Optional[str] = None


class StoreInfo(Schema):
    """Information about a playable sequence (video) associated with an Edit
    and available at the Google Play Store, per country.
    """

    audio_tracks: Optional[list[str]] = None
    country: Optional[str] = None
    edit_level_eidr: Optional[str] = None
    episode_number: Optional[str] = None
    has_audio51: Optional[bool] = None
    has_est_offer: Optional[bool] = None
    has_hd_offer: Optional[bool] = None
    has_info_cards: Optional[bool] = None
    has_sd_offer: Optional[bool] = None
    has_vod_offer: Optional[bool] = None
    live_time: Optional[Timestamp] = None
    mid: Optional[str] = None
    name: Optional[str] = None
    pph_names: Optional[list[str]] = None
    season_id: Optional[str] = None
    season_name: Optional[str] = None
    season_number: Optional[str] = None
    show_id: Optional[str] = None
    show_name: Optional[str] = None
    studio_name: Optional[str] = None
    subtitles: Optional[list[str]] = None
    title_level_eidr: Optional[str] = None
    trailer_id: Optional[str] = None
    type_: Optional[str] = Field(default=None, alias="type")
    video_id: Optional[str] = None


class ListAvailsResponse(Schema):
    avails: Optional[list[Avail]] = None
    next_page_token: Optional[str] = None
    total_size: Optional[int] = None


class ListOrdersResponse(Schema):
    next_page_token: Optional[str] = None
    orders: Optional[list[Order]] = None
    total_size: Optional[int] = None


class ListStoreInfosResponse(Schema):
    next_page_token: Optional[str] = None
    store_infos: Optional[list[StoreInfo]] = None
    total_size: Optional[int] = None


# ---------------------------------------------------------------------------
# Hub
# ---------------------------------------------------------------------------


class PlayMovies(Hub):
    DEFAULT_BASE_URL = "https://playmoviespartner.googleapis.com/"
    DEFAULT_ROOT_URL = "https://playmoviespartner.googleapis.com/"

    def accounts(self) -> AccountMethods:
        return AccountMethods(self)


# ---------------------------------------------------------------------------
# Method builder
# ---------------------------------------------------------------------------


class AccountMethods:
    """Creates the call builders of all *account* resource operations.

    Not used directly, but through :meth:`PlayMovies.accounts`.
    """

    def __init__(self, hub: PlayMovies) -> None:
        self._hub = hub

    def avails_get(self, account_id: str, avail_id: str) -> AccountAvailGetCall:
        """Get an Avail given its avail group id and avail id."""
        return AccountAvailGetCall(self._hub, accountId=account_id, availId=avail_id)

    def avails_list(self, account_id: str) -> AccountAvailListCall:
        """List Avails owned or managed by the partner."""
        return AccountAvailListCall(self._hub, accountId=account_id)

    def orders_get(self, account_id: str, order_id: str) -> AccountOrderGetCall:
        """Get an Order given its id."""
        return AccountOrderGetCall(self._hub, accountId=account_id, orderId=order_id)

    def orders_list(self, account_id: str) -> AccountOrderListCall:
        """List Orders owned or managed by the partner."""
        return AccountOrderListCall(self._hub, accountId=account_id)

    def store_infos_country_get(
        self, account_id: str, video_id: str, country: str
    ) -> AccountStoreInfoCountryGetCall:
        """Get a StoreInfo given its video id and country.

        Args:
            account_id: The partner account.
            video_id: Video ID.
            country: Country to retrieve, e.g. ``"US"``.
        """
        return AccountStoreInfoCountryGetCall(
            self._hub, accountId=account_id, videoId=video_id, country=country
        )

    def store_infos_list(self, account_id: str) -> AccountStoreInfoListCall:
        """List StoreInfos owned or managed by the partner."""
        return AccountStoreInfoListCall(self._hub, accountId=account_id)


# ---------------------------------------------------------------------------
# Call builders
# ---------------------------------------------------------------------------


class _AccountCall(CallBuilder):
    HTTP_METHOD = "GET"
    DEFAULT_SCOPE = Scope.PLAYMOVIES_PARTNER_READONLY.value

    def account_id(self, new_value: str):
        """REQUIRED. Already set by the method builder."""
        return self._set("accountId", new_value)


class _AccountListCall(_AccountCall):
    PATH_PARAMS = (("{accountId}", "accountId"),)

    def add_video_ids(self, new_value: str):
        """Filter results by video id. Appends to the list of values."""
        return self._append("videoIds", new_value)

    def add_studio_names(self, new_value: str):
        return self._append("studioNames", new_value)

    def add_pph_names(self, new_value: str):
        return self._append("pphNames", new_value)

    def page_token(self, new_value: str):
        return self._set("pageToken", new_value)

    def page_size(self, new_value: int):
        return self._set("pageSize", new_value)


class AccountAvailGetCall(_AccountCall):
    METHOD_ID = "playmoviespartner.accounts.avails.get"
    PATH = "v1/accounts/{accountId}/avails/{availId}"
    PATH_PARAMS = (("{accountId}", "accountId"), ("{availId}", "availId"))
    PARAMS = ("accountId", "availId")
    RESPONSE = Avail

    def avail_id(self, new_value: str) -> AccountAvailGetCall:
        return self._set("availId", new_value)


class AccountAvailListCall(_AccountListCall):
    METHOD_ID = "playmoviespartner.accounts.avails.list"
    PATH = "v1/accounts/{accountId}/avails"
    PARAMS = (
        "accountId", "videoIds", "title", "territories", "studioNames", "pphNames",
        "pageToken", "pageSize", "altIds", "altId",
    )
    RESPONSE = ListAvailsResponse

    def title(self, new_value: str) -> AccountAvailListCall:
        """Filter that matches Avails with a title name, case-insensitive, containing the given value."""
        return self._set("title", new_value)

    def add_territories(self, new_value: str) -> AccountAvailListCall:
        """Filter Avails that match (case-insensitive) any of the given country codes."""
        return self._append("territories", new_value)

    def add_alt_ids(self, new_value: str) -> AccountAvailListCall:
        return self._append("altIds", new_value)

    def alt_id(self, new_value: str) -> AccountAvailListCall:
        """Filter Avails that match a case-insensitive, partner-specific custom id."""
        return self._set("altId", new_value)


class AccountOrderGetCall(_AccountCall):
    METHOD_ID = "playmoviespartner.accounts.orders.get"
    PATH = "v1/accounts/{accountId}/orders/{orderId}"
    PATH_PARAMS = (("{accountId}", "accountId"), ("{orderId}", "orderId"))
    PARAMS = ("accountId", "orderId")
    RESPONSE = Order

    def order_id(self, new_value: str) -> AccountOrderGetCall:
        return self._set("orderId", new_value)


class AccountOrderListCall(_AccountListCall):
    METHOD_ID = "playmoviespartner.accounts.orders.list"
    PATH = "v1/accounts/{accountId}/orders"
    PARAMS = (
        "accountId", "videoIds", "studioNames", "status", "pphNames",
        "pageToken", "pageSize", "name", "customId",
    )
    RESPONSE = ListOrdersResponse

    def add_status(self, new_value: str) -> AccountOrderListCall:
        """Filter Orders that match one of the given status."""
        return self._append("status", new_value)

    def name(self, new_value: str) -> AccountOrderListCall:
        """Filter that matches Orders with a ``name``, ``show``, ``season`` or
        ``episode`` that contains the given case-insensitive name.
        """
        return self._set("name", new_value)

    def custom_id(self, new_value: str) -> AccountOrderListCall:
        return self._set("customId", new_value)


class AccountStoreInfoCountryGetCall(_AccountCall):
    METHOD_ID = "playmoviespartner.accounts.storeInfos.country.get"
    PATH = "v1/accounts/{accountId}/storeInfos/{videoId}/country/{country}"
    PATH_PARAMS = (
        ("{accountId}", "accountId"),
        ("{videoId}", "videoId"),
        ("{country}", "country"),
    )
    PARAMS = ("accountId", "videoId", "country")
    RESPONSE = StoreInfo

    def video_id(self, new_value: str) -> AccountStoreInfoCountryGetCall:
        return self._set("videoId", new_value)

    def country(self, new_value: str) -> AccountStoreInfoCountryGetCall:
        return self._set("country", new_value)


class AccountStoreInfoListCall(_AccountListCall):
    METHOD_ID = "playmoviespartner.accounts.storeInfos.list"
    PATH = "v1/accounts/{accountId}/storeInfos"
    PARAMS = (
        "accountId", "videoIds", "videoId", "studioNames", "seasonIds", "pphNames",
        "pageToken", "pageSize", "name", "mids", "countries",
    )
    RESPONSE = ListStoreInfosResponse

    def video_id(self, new_value: str) -> AccountStoreInfoListCall:
        """Filter StoreInfos that match a given ``video_id``.

        Note that this field is deprecated in favour of ``add_video_ids``.
        """
        return self._set("videoId", new_value)

    def add_season_ids(self, new_value: str) -> AccountStoreInfoListCall:
        return self._append("seasonIds", new_value)

    def name(self, new_value: str) -> AccountStoreInfoListCall:
        return self._set("name", new_value)

    def add_mids(self, new_value: str) -> AccountStoreInfoListCall:
        """Filter StoreInfos that match any of the given ``mid``s."""
        return self._append("mids", new_value)

    def add_countries(self, new_value: str) -> AccountStoreInfoListCall:
        return self._append("countries", new_value)
