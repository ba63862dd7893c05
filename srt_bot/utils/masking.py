"""Utility functions for masking personal data in logs and outputs."""


def mask_email(email: str) -> str:
    """
    Mask email address for logging purposes.

    Example: user@example.com -> u***@e***.com

    Args:
        email: Email address to mask

    Returns:
        Masked email address
    """
    if not email or "@" not in email:
        return "***"

    parts = email.split("@")
    if len(parts) != 2:
        return "***"

    local, domain = parts
    masked_local = local[0] + "***" if local else "***"

    # Keep first character of the domain label and the full suffix
    domain_parts = domain.split(".")
    if len(domain_parts) >= 2 and domain_parts[0]:
        masked_domain = domain_parts[0][0] + "***." + ".".join(domain_parts[1:])
    else:
        masked_domain = "***"

    return f"{masked_local}@{masked_domain}"


def mask_phone(phone: str) -> str:
    """
    Mask phone number for logging purposes.

    Example: 01012345678 -> 010****5678
    """
    if not phone or len(phone) < 8:
        return "***"
    return phone[:3] + "****" + phone[-4:]
