from __future__ import annotations

import asyncio
import os
import sys
from typing import Optional

from hal_client import BadResponseError, HalClient, HalClientError, setup_logging


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    # --- Config ---
    root_url = _env("HAL_CLIENT_ROOT_URL")
    if not root_url:
        return _fail("Missing HAL_CLIENT_ROOT_URL.")
    follow_rel = _env("SMOKE_TEST_REL")

    setup_logging(_env("SMOKE_TEST_LOG_LEVEL", "INFO"))

    print("Config:")
    print(f"  root_url: {root_url}")
    print(f"  rel: {follow_rel or '(first non-self link)'}")

    async with HalClient.from_env() as client:
        # --- Root ---
        _print_step("Fetch root")
        try:
            root = await client.root()
        except BadResponseError as exc:
            return _fail(f"{exc} (status {exc.status_code})")
        except HalClientError as exc:
            return _fail(str(exc))

        links = root.get_links()
        for rel, rel_links in links.items():
            for link in rel_links:
                marker = " (templated)" if link.templated else ""
                print(f"  {rel}: {link.href}{marker}")

        # --- Follow ---
        if not follow_rel:
            follow_rel = next(
                (
                    rel
                    for rel, rel_links in links.items()
                    if rel not in ("self", "curies")
                    and rel_links
                    and not rel_links[0].templated
                ),
                None,
            )
        if not follow_rel:
            print("\nNo followable link on root; done.")
            return 0

        _print_step(f"Follow {follow_rel}")
        if not root.has_link(follow_rel):
            return _fail(f"Root has no {follow_rel!r} link.")
        link = root.get_first_link(follow_rel)
        if link is None:
            return _fail(f"Relation {follow_rel!r} has no entries.")
        try:
            resource = await link.get()
        except HalClientError as exc:
            return _fail(str(exc))

        print(f"  properties: {sorted(map(str, resource.get_properties()))}")
        print(f"  links: {sorted(resource.get_links())}")
        print(f"  embedded: {sorted(resource.get_resources())}")

    print("\nOK")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run_smoke_test()))
