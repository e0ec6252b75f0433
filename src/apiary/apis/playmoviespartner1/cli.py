"""The ``playmoviespartner1`` command-line tool."""

from __future__ import annotations

from apiary.apis.playmoviespartner1 import api
from apiary.cli import ApiCli, Arg, Command, Param, run

_ACCOUNT_ID = Arg("account-id", "REQUIRED. See _General rules_ for more information about this field.")

_LIST_PARAMS = {
    "page-size": Param("page_size", "int32"),
    "page-token": Param("page_token"),
    "pph-names": Param("add_pph_names"),
    "studio-names": Param("add_studio_names"),
    "video-ids": Param("add_video_ids"),
}

COMMANDS = (
    Command(
        "accounts", "avails-get", "avails_get",
        about="Get an Avail given its avail group id and avail id.",
        args=(_ACCOUNT_ID, Arg("avail-id", "REQUIRED. Avail ID.")),
    ),
    Command(
        "accounts", "avails-list", "avails_list",
        about="List Avails owned or managed by the partner.",
        args=(_ACCOUNT_ID,),
        params={
            **_LIST_PARAMS,
            "alt-id": Param("alt_id"),
            "alt-ids": Param("add_alt_ids"),
            "territories": Param("add_territories"),
            "title": Param("title"),
        },
    ),
    Command(
        "accounts", "orders-get", "orders_get",
        about="Get an Order given its id.",
        args=(_ACCOUNT_ID, Arg("order-id", "REQUIRED. Order ID.")),
    ),
    Command(
        "accounts", "orders-list", "orders_list",
        about="List Orders owned or managed by the partner.",
        args=(_ACCOUNT_ID,),
        params={
            **_LIST_PARAMS,
            "custom-id": Param("custom_id"),
            "name": Param("name"),
            "status": Param("add_status"),
        },
    ),
    Command(
        "accounts", "store-infos-country-get", "store_infos_country_get",
        about="Get a StoreInfo given its video id and country.",
        args=(
            _ACCOUNT_ID,
            Arg("video-id", "REQUIRED. Video ID."),
            Arg("country", "REQUIRED. Edit country."),
        ),
    ),
    Command(
        "accounts", "store-infos-list", "store_infos_list",
        about="List StoreInfos owned or managed by the partner.",
        args=(_ACCOUNT_ID,),
        params={
            **_LIST_PARAMS,
            "countries": Param("add_countries"),
            "mids": Param("add_mids"),
            "name": Param("name"),
            "season-ids": Param("add_season_ids"),
            "video-id": Param("video_id"),
        },
    ),
)

CLI = ApiCli(
    name="playmoviespartner1",
    version="6.0.0+20170919",
    about="Gets the delivery status of titles for Google Play Movies Partners.",
    hub=api.PlayMovies,
    commands=COMMANDS,
    groups={"accounts": "Methods on the *account* resources."},
)


def main() -> None:
    run(CLI)


if __name__ == "__main__":
    main()
