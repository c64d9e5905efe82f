"""
Metadata Service — checks that the hosted image and metadata JSON are reachable.

The token only stores the metadata URL on-chain; explorers fetch the JSON
from GitHub Pages. This service fetches both URLs and runs presence checks on
the document. It does not validate the schema beyond those checks.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

BURNABLE_EXPECTED = "Yes - By Authority Only"
TRANSFERABLE_EXPECTED = "No"
STANDARD_EXPECTED = "Token Metadata"

KEY_ATTRIBUTES = [
    "Company/Project Name",
    "Verification Tier",
    "Transferable",
    "Burnable",
    "Network",
    "Standard",
    "Issue Date",
    "Expiry Date",
]

GOVERNANCE_ATTRIBUTES = [
    "Token Contract Address",
    "Treasury Wallet Address",
    "Liquidity Pool (LP) Wallet Address",
    "Company Website URL",
    "Social Media URLs",
    "Audit Report Hash",
    "Governance Framework Hash",
]


@dataclass
class UrlCheck:
    name: str
    url: str
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None
    metadata: Optional[dict] = None


def get_attribute(attributes: Any, trait_type: str) -> str:
    """Value of the attribute with this trait_type, or 'Not found'."""
    if not isinstance(attributes, list):
        return "Not found"
    for attr in attributes:
        if isinstance(attr, dict) and attr.get("trait_type") == trait_type:
            return attr.get("value", "Not found")
    return "Not found"


def check_url(client: httpx.Client, name: str, url: str, parse_json: bool = False) -> UrlCheck:
    """
    GET a URL and report whether it is reachable.

    Args:
        client: httpx.Client (timeouts and redirects configured by the caller)
        name: Label for logs ('Image URL', 'Metadata URL')
        url: URL to fetch
        parse_json: Parse the body as the metadata document

    Returns:
        UrlCheck (ok=False on HTTP errors, transport errors or invalid JSON)
    """
    logger.info(f"🔍 Checking {name}...")
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"❌ {name}: Error - {e}")
        return UrlCheck(name=name, url=url, ok=False, error=str(e))

    if not response.is_success:
        logger.error(f"❌ {name}: Failed ({response.status_code} {response.reason_phrase})")
        return UrlCheck(name=name, url=url, ok=False, status_code=response.status_code,
                        error=f"{response.status_code} {response.reason_phrase}")

    logger.info(f"✅ {name}: Working ({response.status_code})")
    check = UrlCheck(name=name, url=url, ok=True, status_code=response.status_code)

    if parse_json:
        try:
            document = response.json()
        except ValueError as e:
            logger.error(f"   ❌ Could not parse JSON metadata: {e}")
            check.ok = False
            check.error = f"Could not parse JSON metadata: {e}"
            return check
        if not isinstance(document, dict):
            check.ok = False
            check.error = "Metadata JSON is not an object"
            return check
        check.metadata = document

    return check


def validate_metadata(metadata: dict, expected_network: str) -> list[tuple[str, bool | str]]:
    """
    Presence checks on the metadata document.

    Returns:
        list of (check name, result); results are booleans except the
        attribute count, which is informational text.
    """
    attributes = metadata.get("attributes")
    attribute_list = attributes if isinstance(attributes, list) else []
    return [
        ("Name exists", bool(metadata.get("name"))),
        ("Symbol exists", bool(metadata.get("symbol"))),
        ("Image URL valid", bool(metadata.get("image"))),
        ("Has attributes array", isinstance(attributes, list)),
        ("Burnable = Authority Only", get_attribute(attribute_list, "Burnable") == BURNABLE_EXPECTED),
        ("Transferable = No", get_attribute(attribute_list, "Transferable") == TRANSFERABLE_EXPECTED),
        (f"Network = {expected_network}", get_attribute(attribute_list, "Network") == expected_network),
        (f"Standard = {STANDARD_EXPECTED}", get_attribute(attribute_list, "Standard") == STANDARD_EXPECTED),
        ("Has properties", bool(metadata.get("properties"))),
        ("Total attributes count", f"{len(attribute_list)} attributes"),
    ]


def metadata_passes(checks: list[tuple[str, bool | str]]) -> bool:
    return all(result for _, result in checks if isinstance(result, bool))


def describe_metadata(metadata: dict) -> list[str]:
    """Human-readable summary lines of the metadata document."""
    attributes = metadata.get("attributes") or []
    description = str(metadata.get("description", ""))
    lines = [
        f"   📄 Name: {metadata.get('name')}",
        f"   🏷️  Symbol: {metadata.get('symbol')}",
        f"   📝 Description: {description[:80]}{'...' if len(description) > 80 else ''}",
        f"   🌐 External URL: {metadata.get('external_url')}",
        "",
        "   📋 Key Attributes:",
    ]
    lines += [f"   • {name}: {get_attribute(attributes, name)}" for name in KEY_ATTRIBUTES]
    lines += ["", "   🏛️  Governance Attributes:"]
    lines += [f"   • {name}: {get_attribute(attributes, name)}" for name in GOVERNANCE_ATTRIBUTES]

    custom_fields = metadata.get("custom_fields")
    if isinstance(custom_fields, dict) and custom_fields:
        lines += ["", "   🔧 Custom Fields:"]
        lines += [f"   📌 {key}: {value}" for key, value in custom_fields.items()]
    return lines
