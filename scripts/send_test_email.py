#!/usr/bin/env python3
"""Send both applicant email templates to an address through the configured transports."""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from leadflow.constants.eligibility import Eligibility  # noqa: E402
from leadflow.core.config import get_settings  # noqa: E402
from leadflow.core.exceptions import DeliveryError  # noqa: E402
from leadflow.services.notification import NotificationService  # noqa: E402


async def send_samples(recipient: str, name: str) -> int:
    """Render and send the enquiry and eligibility emails; returns an exit code."""
    notifier = NotificationService.from_settings(get_settings())
    readiness = await notifier.selector.initialize(wait=True)
    logger.info(f"Transport readiness: {readiness}")

    failures = 0
    try:
        receipt = await notifier.send_enquiry_confirmation(
            recipient, name, "Test Service", {"university": "Cambridge", "course": "CS"}
        )
        logger.info(f"Enquiry email sent via {receipt.provider}: {receipt.message_id}")
    except DeliveryError as e:
        failures += 1
        logger.error(f"Enquiry email failed: {e.message}")

    try:
        receipt = await notifier.send_eligibility_result(
            recipient, name, True, Eligibility.COMPREHENSIVE_RANGE
        )
        logger.info(f"Eligibility email sent via {receipt.provider}: {receipt.message_id}")
    except DeliveryError as e:
        failures += 1
        logger.error(f"Eligibility email failed: {e.message}")

    for attempt in notifier.selector.history:
        logger.info(f"Attempt: {attempt.to_dict()}")

    await notifier.close()
    return 1 if failures else 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("recipient", help="Address that receives the sample emails")
    parser.add_argument("--name", default="Test User", help="Applicant name shown in the emails")
    args = parser.parse_args()
    return asyncio.run(send_samples(args.recipient, args.name))


if __name__ == "__main__":
    sys.exit(main())
