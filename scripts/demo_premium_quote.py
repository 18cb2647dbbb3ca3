#!/usr/bin/env python3
"""Demonstrate premium quoting against the default tariff tables."""

import json
from datetime import date, timedelta

from travel_insurance import (
    PremiumQuoteOrchestrator,
    PremiumRequest,
    build_default_repository,
)
from travel_insurance.core.logging_utils import configure_logging, get_logger
from travel_insurance.services.underwriting.recorder import InMemoryDecisionRecorder

logger = get_logger("demo")


def sample_requests() -> dict[str, PremiumRequest]:
    """Representative requests covering each response status."""
    start = date.today() + timedelta(days=30)
    base = {
        "person_first_name": "Anna",
        "person_last_name": "Berzina",
        "person_birth_date": date(1990, 5, 15),
        "agreement_date_from": start,
        "agreement_date_to": start + timedelta(days=14),
        "country_iso_code": "ES",
        "medical_risk_limit_level": "50000",
    }
    return {
        "Coverage level, active traveller bundle": PremiumRequest(
            **base, selected_risks=["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"]
        ),
        "Country default premium, group of six": PremiumRequest(
            **{**base, "medical_risk_limit_level": None},
            use_country_default_premium=True,
            persons_count=6,
        ),
        "High risk destination": PremiumRequest(**{**base, "country_iso_code": "EG"}),
        "Very high risk destination": PremiumRequest(**{**base, "country_iso_code": "AF"}),
        "Missing birth date": PremiumRequest(**{**base, "person_birth_date": None}),
    }


def main() -> None:
    configure_logging(level="INFO")
    recorder = InMemoryDecisionRecorder()
    orchestrator = PremiumQuoteOrchestrator(build_default_repository(), recorder=recorder)

    for title, request in sample_requests().items():
        response = orchestrator.process(request)
        logger.info("=" * 60)
        logger.info("%s -> %s (HTTP %d)", title, response.status.value, response.http_status)
        if response.pricing is not None:
            logger.info(
                "Premium %s %s (base %s, discounts %s)",
                response.pricing.total_premium,
                response.pricing.currency,
                response.pricing.base_amount,
                response.pricing.total_discount,
            )
        if response.pricing_details is not None:
            logger.info("Formula: %s", response.pricing_details.formula)
        logger.debug(
            "Response:\n%s", json.dumps(response.model_dump(mode="json"), indent=2)
        )
        for finding in response.errors:
            logger.info("Error %s: %s", finding.field, finding.message)

    logger.info("Recorded %d underwriting decisions", len(recorder.records))


if __name__ == "__main__":
    main()
