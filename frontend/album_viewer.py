"""Streamlit album viewer backed by the Chute albums client."""

from __future__ import annotations

import asyncio
import os
from typing import Any

import httpx
import streamlit as st

from chute import AssetResource, HttpTransport, MemoryReceiptStore
from chute.config import API_URL_ENV_VAR, DEFAULT_API_URL

DEFAULT_ALBUM = "aus6kwrg"


def get_api_base() -> str:
    """Prefer Streamlit secrets/env var overrides for API base URL."""
    # Streamlit raises when no secrets file exists, so guard the lookup.
    secret_value: str | None = None
    try:
        secret_value = st.secrets["api_base"]
    except Exception:  # noqa: BLE001 - secrets module raises custom errors
        secret_value = None

    env_value = os.environ.get(API_URL_ENV_VAR)
    return secret_value or env_value or DEFAULT_API_URL


async def collect_assets(
    album: str,
    per_page: int,
    pages: int,
    client: httpx.AsyncClient | None = None,
) -> tuple[list[dict[str, Any]], bool]:
    """Load up to ``pages`` pages of an album.

    Returns the asset records and whether the server still has more.
    """
    transport = HttpTransport(base_url=get_api_base(), client=client)
    resource = AssetResource(transport, receipts=MemoryReceiptStore())
    try:
        assets = resource.query({"album": album, "perPage": per_page})
        (await assets.loaded()).unwrap()
        for _ in range(pages - 1):
            if not assets.has_more():
                break
            (await assets.fetch_next()).unwrap()
    finally:
        if client is None:
            await transport.aclose()
    return [asset.model_dump() for asset in assets], assets.has_more()


def main() -> None:
    st.set_page_config(page_title="Chute Album Viewer", layout="wide")
    st.title("Chute Album Viewer")
    st.caption(f"Assets served by {get_api_base()}")

    with st.sidebar:
        album = st.text_input("Album shortcut", value=DEFAULT_ALBUM)
        per_page = st.slider("Assets per page", min_value=1, max_value=50, value=3)
        if "pages" not in st.session_state:
            st.session_state.pages = 1
        if st.button("Reload", use_container_width=True):
            st.session_state.pages = 1

    with st.spinner("Loading assets from API..."):
        try:
            records, has_more = asyncio.run(
                collect_assets(album, per_page, st.session_state.pages)
            )
        except Exception as exc:  # noqa: BLE001 - surface any API failure to the user
            st.error(f"Failed to load assets: {exc}")
            return

    if not records:
        st.info("This album has no assets.")
        return

    columns = st.columns(min(len(records), 4) or 1)
    for index, record in enumerate(records):
        with columns[index % len(columns)]:
            st.image(record.get("thumbnail") or record.get("url"), caption=record.get("caption"))
            st.caption(f"♥ {record.get('hearts') or 0}")

    if has_more and st.button("Load more"):
        st.session_state.pages += 1
        st.rerun()


if __name__ == "__main__":
    main()
