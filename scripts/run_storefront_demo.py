#!/usr/bin/env python3
"""
Run a storefront session against the in-process mock backend and print each stage.
Shows page load, a debounced search burst, add-to-cart rules and quantity edits.

Usage (from repo root):
  python scripts/run_storefront_demo.py
  python scripts/run_storefront_demo.py --config config/storefront.yml --real
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from storefront.dependencies import build_storefront
from storefront.utils.config_loader import StorefrontConfig, load_storefront_config


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Storefront sync demo")
    parser.add_argument("--config", type=Path, default=None, help="Path to storefront.yml")
    parser.add_argument("--real", action="store_true", help="Talk to the configured backend instead of the mock")
    parser.add_argument("--username", default="demo-shopper")
    parser.add_argument("--password", default="demo-password")
    return parser.parse_args()


async def main():
    setup_logging()
    args = parse_args()

    config = load_storefront_config(args.config) if args.config else StorefrontConfig()
    if not args.real:
        config = config.model_copy(update={"backend": config.backend.model_copy(update={"use_mock": True})})

    app = build_storefront(config)
    controller = app.controller

    # --- Anonymous page load ---
    state = await controller.load()
    print_stage("PAGE LOAD (anonymous): products", [p.to_dict() for p in state.visible_products])

    # --- Add to cart while logged out ---
    first_id = state.products[0].id if state.products else "unknown"
    await controller.add_to_cart(first_id)
    print_stage("ADD TO CART (logged out): notices", [n.message for n in app.notices.notices])

    # --- Register + login, then reload the cart ---
    await app.account.register(args.username, args.password, args.password)
    session = await app.account.login(args.username, args.password)
    print_stage("LOGIN", {"username": session.username if session else None})
    await controller.reload_cart()

    # --- Add to cart, then try adding the same product again ---
    items = await controller.add_to_cart(first_id)
    print_stage("ADD TO CART: cart items", [i.to_dict() for i in items or ()])
    await controller.add_to_cart(first_id)
    print_stage("ADD SAME PRODUCT AGAIN: latest notice", app.notices.notices[-1].message)

    # --- Quantity edit from the cart sidebar ---
    items = await controller.change_quantity(first_id, 3)
    print_stage(
        "CHANGE QUANTITY: cart",
        {"items": [i.to_dict() for i in items or ()], "total": controller.state.cart_total},
    )

    # --- Search burst: only the last query reaches the backend ---
    for query in ("p", "ph", "pho", "phone"):
        controller.on_search_input(query)
    await asyncio.sleep(config.search.debounce_seconds + 0.2)
    print_stage("SEARCH 'phone': visible products", [p.name for p in controller.state.visible_products])

    controller.on_search_input("zzz")
    await asyncio.sleep(config.search.debounce_seconds + 0.2)
    print_stage("SEARCH 'zzz': visible products", [p.name for p in controller.state.visible_products])

    controller.close()
    print("\n" + "=" * 60)
    print("  Demo complete. Check logs above for each stage.")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
