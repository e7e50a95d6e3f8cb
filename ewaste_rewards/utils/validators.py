"""Custom validators and parsers"""

import re
from typing import Optional
from email_validator import validate_email, EmailNotValidError

# Leading number of a free-text quantity such as "2 units" or "0.5 kg"
QUANTITY_PATTERN = re.compile(r"(\d+(\.\d+)?)")

def validate_email_address(email: str) -> str:
    """Validate and normalize email"""
    email = email.strip().lower()

    try:
        validation = validate_email(email, check_deliverability=False)
        return validation.normalized
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email address: {str(e)}")

def parse_quantity(amount: Optional[str]) -> float:
    """Extract the first number from a quantity string, 0 when there is none"""
    if not amount:
        return 0.0
    match = QUANTITY_PATTERN.search(amount)
    return float(match.group(1)) if match else 0.0
