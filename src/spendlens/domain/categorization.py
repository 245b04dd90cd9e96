"""Rule-based transaction categorization and merchant-name extraction."""

import re
from typing import Mapping, Optional

from spendlens.domain.categories import Category

# Ordered rule table: the first pattern found in the upper-cased description
# decides the category. Order matters ("UBER EATS" must precede "UBER",
# "WALMART GROCERY" must precede "WALMART").
MERCHANT_PATTERNS: tuple[tuple[str, Category], ...] = (
    # Food & Dining
    ("MCDONALD", Category.FOOD_AND_DINING),
    ("BURGER KING", Category.FOOD_AND_DINING),
    ("SUBWAY", Category.FOOD_AND_DINING),
    ("STARBUCKS", Category.FOOD_AND_DINING),
    ("DUNKIN", Category.FOOD_AND_DINING),
    ("KFC", Category.FOOD_AND_DINING),
    ("PIZZA", Category.FOOD_AND_DINING),
    ("RESTAURANT", Category.FOOD_AND_DINING),
    ("CAFE", Category.FOOD_AND_DINING),
    ("COFFEE", Category.FOOD_AND_DINING),
    ("CHIPOTLE", Category.FOOD_AND_DINING),
    ("PANERA", Category.FOOD_AND_DINING),
    ("DOMINO", Category.FOOD_AND_DINING),
    ("TACO BELL", Category.FOOD_AND_DINING),
    ("WENDYS", Category.FOOD_AND_DINING),
    ("CHICK-FIL-A", Category.FOOD_AND_DINING),
    ("GRUBHUB", Category.FOOD_AND_DINING),
    ("DOORDASH", Category.FOOD_AND_DINING),
    ("UBEREATS", Category.FOOD_AND_DINING),
    ("UBER EATS", Category.FOOD_AND_DINING),
    ("SEAMLESS", Category.FOOD_AND_DINING),
    ("POSTMATES", Category.FOOD_AND_DINING),
    ("INSTACART", Category.FOOD_AND_DINING),
    ("WHOLE FOODS", Category.FOOD_AND_DINING),
    ("TRADER JOE", Category.FOOD_AND_DINING),
    ("SAFEWAY", Category.FOOD_AND_DINING),
    ("KROGER", Category.FOOD_AND_DINING),
    ("WALMART GROCERY", Category.FOOD_AND_DINING),
    ("PUBLIX", Category.FOOD_AND_DINING),
    # Transport
    ("UBER", Category.TRANSPORT),
    ("LYFT", Category.TRANSPORT),
    ("GAS", Category.TRANSPORT),
    ("SHELL", Category.TRANSPORT),
    ("EXXON", Category.TRANSPORT),
    ("CHEVRON", Category.TRANSPORT),
    ("BP ", Category.TRANSPORT),
    ("MOBIL", Category.TRANSPORT),
    ("PARKING", Category.TRANSPORT),
    ("TOLL", Category.TRANSPORT),
    ("TRANSIT", Category.TRANSPORT),
    ("METRO", Category.TRANSPORT),
    ("BUS", Category.TRANSPORT),
    ("TRAIN", Category.TRANSPORT),
    ("AIRLINE", Category.TRANSPORT),
    ("FLIGHT", Category.TRANSPORT),
    ("DELTA", Category.TRANSPORT),
    ("UNITED", Category.TRANSPORT),
    ("AMERICAN AIRLINES", Category.TRANSPORT),
    ("SOUTHWEST", Category.TRANSPORT),
    ("HERTZ", Category.TRANSPORT),
    ("ENTERPRISE", Category.TRANSPORT),
    ("CAR RENTAL", Category.TRANSPORT),
    # Shopping
    ("AMAZON", Category.SHOPPING),
    ("AMZN", Category.SHOPPING),
    ("TARGET", Category.SHOPPING),
    ("WALMART", Category.SHOPPING),
    ("COSTCO", Category.SHOPPING),
    ("BEST BUY", Category.SHOPPING),
    ("APPLE STORE", Category.SHOPPING),
    ("MACYS", Category.SHOPPING),
    ("NORDSTROM", Category.SHOPPING),
    ("HOME DEPOT", Category.SHOPPING),
    ("LOWES", Category.SHOPPING),
    ("IKEA", Category.SHOPPING),
    ("ETSY", Category.SHOPPING),
    ("EBAY", Category.SHOPPING),
    ("KOHLS", Category.SHOPPING),
    ("CVS", Category.SHOPPING),
    ("WALGREENS", Category.SHOPPING),
    ("RITE AID", Category.SHOPPING),
    # Entertainment
    ("NETFLIX", Category.ENTERTAINMENT),
    ("HULU", Category.ENTERTAINMENT),
    ("DISNEY+", Category.ENTERTAINMENT),
    ("HBO", Category.ENTERTAINMENT),
    ("SPOTIFY", Category.ENTERTAINMENT),
    ("APPLE MUSIC", Category.ENTERTAINMENT),
    ("YOUTUBE", Category.ENTERTAINMENT),
    ("PRIME VIDEO", Category.ENTERTAINMENT),
    ("STEAM", Category.ENTERTAINMENT),
    ("PLAYSTATION", Category.ENTERTAINMENT),
    ("XBOX", Category.ENTERTAINMENT),
    ("NINTENDO", Category.ENTERTAINMENT),
    ("TWITCH", Category.ENTERTAINMENT),
    ("MOVIE", Category.ENTERTAINMENT),
    ("CINEMA", Category.ENTERTAINMENT),
    ("THEATER", Category.ENTERTAINMENT),
    ("CONCERT", Category.ENTERTAINMENT),
    ("GYM", Category.ENTERTAINMENT),
    ("FITNESS", Category.ENTERTAINMENT),
    ("PELOTON", Category.ENTERTAINMENT),
    # Bills & Utilities
    ("ELECTRIC", Category.BILLS_AND_UTILITIES),
    ("POWER", Category.BILLS_AND_UTILITIES),
    ("WATER", Category.BILLS_AND_UTILITIES),
    ("GAS UTILITY", Category.BILLS_AND_UTILITIES),
    ("INTERNET", Category.BILLS_AND_UTILITIES),
    ("COMCAST", Category.BILLS_AND_UTILITIES),
    ("VERIZON", Category.BILLS_AND_UTILITIES),
    ("AT&T", Category.BILLS_AND_UTILITIES),
    ("T-MOBILE", Category.BILLS_AND_UTILITIES),
    ("SPRINT", Category.BILLS_AND_UTILITIES),
    ("PHONE", Category.BILLS_AND_UTILITIES),
    ("INSURANCE", Category.BILLS_AND_UTILITIES),
    ("RENT", Category.BILLS_AND_UTILITIES),
    ("MORTGAGE", Category.BILLS_AND_UTILITIES),
    ("LOAN", Category.BILLS_AND_UTILITIES),
    # Healthcare
    ("PHARMACY", Category.HEALTHCARE),
    ("DOCTOR", Category.HEALTHCARE),
    ("HOSPITAL", Category.HEALTHCARE),
    ("MEDICAL", Category.HEALTHCARE),
    ("DENTAL", Category.HEALTHCARE),
    ("VISION", Category.HEALTHCARE),
    ("HEALTH", Category.HEALTHCARE),
    ("CLINIC", Category.HEALTHCARE),
    # Income
    ("SALARY", Category.INCOME),
    ("PAYROLL", Category.INCOME),
    ("DEPOSIT", Category.INCOME),
    ("DIRECT DEP", Category.INCOME),
    ("PAYMENT RECEIVED", Category.INCOME),
    ("REFUND", Category.INCOME),
    ("INTEREST", Category.INCOME),
    ("DIVIDEND", Category.INCOME),
    # Transfer
    ("TRANSFER", Category.TRANSFER),
    ("VENMO", Category.TRANSFER),
    ("PAYPAL", Category.TRANSFER),
    ("ZELLE", Category.TRANSFER),
    ("CASH APP", Category.TRANSFER),
    ("WITHDRAWAL", Category.TRANSFER),
    ("ATM", Category.TRANSFER),
    # Investment
    ("ROBINHOOD", Category.INVESTMENT),
    ("FIDELITY", Category.INVESTMENT),
    ("VANGUARD", Category.INVESTMENT),
    ("SCHWAB", Category.INVESTMENT),
    ("E*TRADE", Category.INVESTMENT),
    ("COINBASE", Category.INVESTMENT),
    ("CRYPTO", Category.INVESTMENT),
)

# Boilerplate stripped from descriptions, applied in this order
_PREFIX_RE = re.compile(
    r"^(DEBIT CARD PURCHASE|CREDIT CARD PURCHASE|ACH|CHECK|POS|ONLINE)\s*", re.IGNORECASE
)
_TRANSACTION_ID_RE = re.compile(r"\s*#\d+.*$")
_EMBEDDED_DATE_RE = re.compile(r"\s*\d{2}/\d{2}.*$")
_AMOUNT_SUFFIX_RE = re.compile(r"\s*-\s*\$.*$")
_STATE_ZIP_RE = re.compile(r"\s+[A-Z]{2}\s+\d{5}")
_PHONE_RE = re.compile(r"\s+\d{3}-\d{3}-\d{4}")


def categorize_transaction(description: str) -> Category:
    """Categorize a transaction description with the merchant rule table.

    Args:
        description: Raw description text

    Returns:
        Category of the first matching pattern, or Category.OTHER
    """
    upper_desc = description.upper()

    for pattern, category in MERCHANT_PATTERNS:
        if pattern in upper_desc:
            return category

    # Generic purchase wording does not tell us anything more
    if "PAYMENT" in upper_desc or "PURCHASE" in upper_desc:
        return Category.OTHER

    return Category.OTHER


def extract_merchant_name(description: str) -> str:
    """Extract a display merchant name from a raw description.

    Strips card/ACH/POS prefixes, trailing transaction IDs, embedded dates,
    dollar amounts, "STATE ZIP" suffixes and phone numbers.

    Args:
        description: Raw description text

    Returns:
        Merchant name, or the description itself if nothing is left
    """
    merchant = _PREFIX_RE.sub("", description, count=1)
    merchant = _TRANSACTION_ID_RE.sub("", merchant, count=1)
    merchant = _EMBEDDED_DATE_RE.sub("", merchant, count=1)
    merchant = _AMOUNT_SUFFIX_RE.sub("", merchant, count=1)
    merchant = merchant.strip()

    merchant = _STATE_ZIP_RE.split(merchant, maxsplit=1)[0]
    merchant = _PHONE_RE.split(merchant, maxsplit=1)[0]

    return merchant.strip() or description


def get_merchant_category(
    merchant: str, user_mappings: Optional[Mapping[str, Category]] = None
) -> Category:
    """Categorize a merchant, preferring the user's own overrides.

    Args:
        merchant: Merchant display name
        user_mappings: Lower-cased merchant name to Category overrides

    Returns:
        Category
    """
    normalized = merchant.lower().strip()
    if user_mappings and normalized in user_mappings:
        return user_mappings[normalized]

    return categorize_transaction(merchant)


def default_category_mappings() -> dict[str, Category]:
    """Return the built-in rule table as a pattern to Category dict."""
    return dict(MERCHANT_PATTERNS)
