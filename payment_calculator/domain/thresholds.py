"""Tax threshold policy - derives compliance obligations from the transaction mix"""

import math

from payment_calculator.domain.models import ComplianceFlags, TransactionProfile

# EU VAT OSS applies from the first EU sale; 1% of the mix stands in for that
EU_VAT_MIN_SHARE_PCT = 1
# UK VAT registration threshold on domestic sales value (GBP)
UK_VAT_THRESHOLD = 85_000
# US sales tax economic nexus, by number of US sales
US_SALES_TAX_TRANSACTION_THRESHOLD = 200
US_SALES_PER_NEXUS = 200


def derive_compliance_flags(profile: TransactionProfile) -> ComplianceFlags:
    """
    Work out which tax registrations the merchant needs.

    Rules:
    - EU VAT OSS: European share >= 1%
    - UK VAT: domestic sales value >= 85,000
    - US sales tax: more than 200 US sales
    - Nexus count: one state per 200 US sales, never fewer than 1

    Pure and idempotent; callers re-run it whenever the profile changes and
    use the result as-is. Manual options such as chargeback inclusion are
    not part of the derived flags.
    """
    turnover = profile.monthly_turnover
    uk_sales_value = turnover * (profile.domestic_share_pct / 100)
    us_sales_count = profile.monthly_volume * (profile.us_share_pct / 100)

    return ComplianceFlags(
        eu_vat_oss_required=profile.european_share_pct >= EU_VAT_MIN_SHARE_PCT,
        uk_vat_required=uk_sales_value >= UK_VAT_THRESHOLD,
        us_sales_tax_required=us_sales_count > US_SALES_TAX_TRANSACTION_THRESHOLD,
        nexus_count=max(1, math.floor(us_sales_count / US_SALES_PER_NEXUS)),
    )
