#!/usr/bin/env python3
"""
Run a payment through the faker gateway and print each stage to the terminal.
Shows initiation, checkout URL, resolution, status and webhook payload.

Usage (from repo root, after `pip install -e .`):
  python scripts/run_faker_demo.py
  python scripts/run_faker_demo.py --outcome rate --success-rate 0.5 --seed 7
  python scripts/run_faker_demo.py --outcome cancel
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from payment_faker import (
    PaymentFakerService,
    RecordingWebhookDispatcher,
    ResolutionOutcome,
    SeededRandomSource,
)
from payment_faker.errors import PaymentFakerError
from payment_faker.utils.config_loader import load_faker_config


def setup_logging(verbose: bool):
    """Log to terminal so every stage is visible."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
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


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Walk one payment through the faker gateway")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--transaction-id", default="TXN-DEMO-1")
    parser.add_argument("--amount", type=float, default=10000)
    parser.add_argument("--currency", default="XOF")
    parser.add_argument(
        "--outcome",
        choices=["approve", "reject", "rate", "cancel"],
        default="approve",
        help="How to resolve the payment",
    )
    parser.add_argument("--success-rate", type=float, default=None, help="Override success rate for --outcome rate")
    parser.add_argument("--seed", type=int, default=None, help="Seed the random source for a reproducible run")
    parser.add_argument("--webhook-url", default="https://merchant.example/webhooks/faker")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    config = load_faker_config(args.config)
    webhooks = RecordingWebhookDispatcher()
    service = PaymentFakerService.from_config(
        config,
        random_source=SeededRandomSource(args.seed),
        webhook_dispatcher=webhooks,
    )
    client = service.client
    if args.success_rate is not None:
        client.set_success_rate(args.success_rate)

    payment = {
        "transaction_id": args.transaction_id,
        "amount": args.amount,
        "currency": args.currency,
        "description": "Faker demo order",
        "customer_name": "Demo Customer",
        "customer_email": "demo@example.com",
    }
    print_stage("REQUEST: Payment data", payment)

    try:
        initiated = service.initiate_payment(
            payment,
            success_url="https://merchant.example/payment/success",
            cancel_url="https://merchant.example/payment/cancel",
            webhook_url=args.webhook_url,
        )
        print_stage("INITIATED: Redirect the customer to", initiated.to_dict())

        if args.outcome == "cancel":
            transaction = client.cancel_payment(initiated.transaction_ref)
        else:
            outcome = {
                "approve": ResolutionOutcome.APPROVE,
                "reject": ResolutionOutcome.REJECT,
                "rate": ResolutionOutcome.USE_CONFIGURED_RATE,
            }[args.outcome]
            transaction = client.resolve_payment(initiated.transaction_ref, outcome)
        print_stage(f"RESOLVED ({args.outcome}): Transaction", transaction.to_dict())

        status = service.check_status(initiated.transaction_ref)
        print_stage("STATUS", {k: v for k, v in status.to_dict().items() if k != "data"})
    except PaymentFakerError as exc:
        print_stage("ERROR", exc.to_dict())
        return 1

    delivered = [{"url": d.url, "payload": d.payload.to_dict()} for d in webhooks.deliveries]
    print_stage("WEBHOOKS DISPATCHED", delivered or "none")
    return 0


if __name__ == "__main__":
    sys.exit(main())
