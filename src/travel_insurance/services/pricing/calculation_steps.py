"""Human-readable trace of the premium arithmetic."""

from decimal import Decimal

from beartype import beartype

from ...core.money import ONE, ZERO
from ...models.premium import CalculationStep, PayoutLimitResult


@beartype
class CalculationStepsBuilder:
    """Turn coefficient breakdowns into ordered calculation steps and formulas."""

    @staticmethod
    def coverage_level_steps(
        *,
        daily_rate: Decimal,
        age_coefficient: Decimal,
        country_coefficient: Decimal,
        duration_coefficient: Decimal,
        additional_risks_coefficient: Decimal,
        days: int,
        raw_premium: Decimal,
        payout_limit: PayoutLimitResult,
        bundle_discount: Decimal,
        final_premium: Decimal,
    ) -> list[CalculationStep]:
        steps = [
            CalculationStep(
                description="Base daily rate (coverage level)",
                formula=f"Daily Rate = {daily_rate:.2f}",
                result=daily_rate,
            )
        ]
        running = daily_rate * age_coefficient
        steps.append(
            CalculationStep(
                description="Age coefficient applied",
                formula=f"{daily_rate:.2f} × {age_coefficient:.4f} (age coeff) = {running:.4f}",
                result=running,
            )
        )
        after_country = running * country_coefficient
        steps.append(
            CalculationStep(
                description="Country risk coefficient applied",
                formula=(
                    f"{running:.4f} × {country_coefficient:.4f} (country coeff) "
                    f"= {after_country:.4f}"
                ),
                result=after_country,
            )
        )
        steps.extend(
            CalculationStepsBuilder._common_tail(
                running=after_country,
                duration_coefficient=duration_coefficient,
                additional_risks_coefficient=additional_risks_coefficient,
                days=days,
                premium_before_limit=raw_premium,
            )
        )
        adjusted = payout_limit.adjusted_premium
        if payout_limit.was_applied and payout_limit.applied_limit is not None:
            steps.append(
                CalculationStep(
                    description="Payout limit correction applied",
                    formula=(
                        f"{raw_premium:.2f} × (payout limit {payout_limit.applied_limit:.2f}"
                        f" / coverage) = {adjusted:.2f}"
                    ),
                    result=adjusted,
                )
            )
        steps.extend(
            CalculationStepsBuilder._bundle_step(adjusted, bundle_discount, final_premium)
        )
        return steps

    @staticmethod
    def country_default_steps(
        *,
        default_day_premium: Decimal,
        age_coefficient: Decimal,
        duration_coefficient: Decimal,
        additional_risks_coefficient: Decimal,
        days: int,
        base_premium: Decimal,
        bundle_discount: Decimal,
        final_premium: Decimal,
    ) -> list[CalculationStep]:
        running = default_day_premium * age_coefficient
        steps = [
            CalculationStep(
                description="Country default day premium (country risk already included)",
                formula=f"Default Day Rate = {default_day_premium:.2f}",
                result=default_day_premium,
            ),
            CalculationStep(
                description="Age coefficient applied",
                formula=(
                    f"{default_day_premium:.2f} × {age_coefficient:.4f} (age coeff) "
                    f"= {running:.4f}"
                ),
                result=running,
            ),
        ]
        steps.extend(
            CalculationStepsBuilder._common_tail(
                running=running,
                duration_coefficient=duration_coefficient,
                additional_risks_coefficient=additional_risks_coefficient,
                days=days,
                premium_before_limit=base_premium,
            )
        )
        steps.extend(
            CalculationStepsBuilder._bundle_step(
                base_premium, bundle_discount, final_premium
            )
        )
        return steps

    @staticmethod
    def coverage_level_formula(
        *,
        daily_rate: Decimal,
        age_coefficient: Decimal,
        country_coefficient: Decimal,
        duration_coefficient: Decimal,
        additional_risks_coefficient: Decimal,
        days: int,
        final_premium: Decimal,
    ) -> str:
        return (
            f"Premium = {daily_rate:.2f} × {age_coefficient:.4f} × "
            f"{country_coefficient:.4f} × {duration_coefficient:.4f} × "
            f"(1 + {additional_risks_coefficient:.4f}) × {days} days = {final_premium:.2f}"
        )

    @staticmethod
    def country_default_formula(
        *,
        default_day_premium: Decimal,
        age_coefficient: Decimal,
        duration_coefficient: Decimal,
        additional_risks_coefficient: Decimal,
        days: int,
        final_premium: Decimal,
    ) -> str:
        return (
            f"Premium = {default_day_premium:.2f} (country default) × "
            f"{age_coefficient:.4f} × {duration_coefficient:.4f} × "
            f"(1 + {additional_risks_coefficient:.4f}) × {days} days = {final_premium:.2f}"
        )

    @staticmethod
    def _common_tail(
        *,
        running: Decimal,
        duration_coefficient: Decimal,
        additional_risks_coefficient: Decimal,
        days: int,
        premium_before_limit: Decimal,
    ) -> list[CalculationStep]:
        after_duration = running * duration_coefficient
        steps = [
            CalculationStep(
                description="Duration coefficient applied",
                formula=(
                    f"{running:.4f} × {duration_coefficient:.4f} (duration coeff) "
                    f"= {after_duration:.4f}"
                ),
                result=after_duration,
            )
        ]
        if additional_risks_coefficient > ZERO:
            after_risks = after_duration * (ONE + additional_risks_coefficient)
            steps.append(
                CalculationStep(
                    description="Additional risks (age-modified)",
                    formula=(
                        f"{after_duration:.4f} × (1 + {additional_risks_coefficient:.4f}) "
                        f"= {after_risks:.4f}"
                    ),
                    result=after_risks,
                )
            )
        steps.append(
            CalculationStep(
                description="Multiply by trip days",
                formula=f"× {days} days = {premium_before_limit:.2f}",
                result=premium_before_limit,
            )
        )
        return steps

    @staticmethod
    def _bundle_step(
        premium: Decimal, bundle_discount: Decimal, final_premium: Decimal
    ) -> list[CalculationStep]:
        if bundle_discount <= ZERO:
            return []
        return [
            CalculationStep(
                description="Bundle discount applied",
                formula=(
                    f"{premium:.2f} - {bundle_discount:.2f} (bundle discount) "
                    f"= {final_premium:.2f}"
                ),
                result=final_premium,
            )
        ]
