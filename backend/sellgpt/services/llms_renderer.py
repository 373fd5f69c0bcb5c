"""
llms.txt renderer.

Turns the REST payloads for a shop and its products into the markdown
discovery document served at /llms.txt. Pure and deterministic: the same
inputs always produce the same text, and missing fields degrade to empty
strings or defaults instead of raising.
"""
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Sequence
from urllib.parse import urlparse

DEFAULT_LOCALE = "en"
DEFAULT_CURRENCY = "USD"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_VARIANT_TITLE = "Default Title"

_TAG_RE = re.compile(r"<[A-Za-z/!?][^>]*>")
_CENTS = Decimal("0.01")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> Sequence[Any]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return value
    return ()


def strip_tags(html: Optional[str]) -> str:
    """
    Remove HTML tags, leaving the surrounding text and whitespace alone.

    Angle brackets that are not part of a tag are escaped as entities.
    """
    text = _TAG_RE.sub("", _text(html))
    return text.replace("<", "&lt;").replace(">", "&gt;")


def format_price(price: Any) -> str:
    """Format a decimal price with two fixed places; unparseable values pass through."""
    try:
        return str(Decimal(str(price).strip()).quantize(_CENTS, rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError):
        return _text(price)


def _has_value(value: Any) -> bool:
    return value is not None and _text(value).strip() != ""


def is_product_available(product: Mapping[str, Any]) -> bool:
    return _text(product.get("status")).strip().lower() == "active"


def is_variant_available(variant: Mapping[str, Any]) -> bool:
    """In stock, or sold past zero because the inventory policy is `continue`."""
    try:
        quantity = int(variant.get("inventory_quantity") or 0)
    except (TypeError, ValueError):
        quantity = 0
    policy = _text(variant.get("inventory_policy")).strip().lower()
    return quantity > 0 or policy == "continue"


def _availability(available: bool) -> str:
    return "Available" if available else "Unavailable"


def variant_url(product_url: str, variant: Mapping[str, Any], variant_count: int) -> str:
    if variant_count == 1 and variant.get("title") == DEFAULT_VARIANT_TITLE:
        return product_url
    return f"{product_url}?variant={_text(variant.get('id'))}"


def _price_line(indent: str, price: Any, currency: str) -> str:
    return f"{indent}Price: ${format_price(price)} {currency}"


def _shop_lines(shop_info: Mapping[str, Any], base_url: str, host: str) -> list[str]:
    name = _text(shop_info.get("name")).strip() or host
    lines = [f"# {name} ({base_url})", ""]

    lines.append(f"- Domain: {_text(shop_info.get('domain')) or host}")
    lines.append(f"- Locale: {_text(shop_info.get('primary_locale')) or DEFAULT_LOCALE}")
    lines.append(f"- Currency: {_text(shop_info.get('currency')) or DEFAULT_CURRENCY}")
    lines.append(f"- Timezone: {_text(shop_info.get('iana_timezone')) or DEFAULT_TIMEZONE}")

    contact = shop_info.get("customer_email") or shop_info.get("email")
    optional = (
        ("Created", shop_info.get("created_at")),
        ("Contact", contact),
        ("Updated", shop_info.get("updated_at")),
    )
    for label, value in optional:
        if _has_value(value):
            lines.append(f"- {label}: {_text(value)}")

    lines.append("")
    return lines


def _product_lines(product: Mapping[str, Any], base_url: str, currency: str) -> list[str]:
    title = _text(product.get("title"))
    product_url = f"{base_url}/products/{_text(product.get('handle'))}"

    entry = f"- [{title}]({product_url})"
    description = strip_tags(product.get("body_html"))
    if description.strip():
        entry = f"{entry}: {description}"
    lines = [entry]

    for label, key in (
        ("Updated", "updated_at"),
        ("Vendor", "vendor"),
        ("Product Type", "product_type"),
    ):
        if _has_value(product.get(key)):
            lines.append(f"  {label}: {_text(product.get(key))}")

    lines.append(f"  Availability: {_availability(is_product_available(product))}")

    images = _sequence(product.get("images"))
    if images:
        src = _mapping(images[0]).get("src")
        if _has_value(src):
            lines.append(f"  Image: {_text(src)}")

    variants = [_mapping(v) for v in _sequence(product.get("variants"))]
    if variants and _has_value(variants[0].get("price")):
        lines.append(_price_line("  ", variants[0].get("price"), currency))

    if len(variants) > 1:
        for variant in variants:
            label = _text(variant.get("title")) or "Default"
            lines.append(f"  - [{label}]({variant_url(product_url, variant, len(variants))})")
            lines.append(f"    Availability: {_availability(is_variant_available(variant))}")
            if _has_value(variant.get("price")):
                lines.append(_price_line("    ", variant.get("price"), currency))

    return lines


def render_llms_txt(
    shop_info: Optional[Mapping[str, Any]],
    products: Optional[Sequence[Mapping[str, Any]]],
    shop_base_url: str,
) -> str:
    """
    Render the llms.txt markdown document for a shop.

    Args:
        shop_info: The `shop` object from shop.json
        products: The `products` list from products.json, in catalog order
        shop_base_url: Storefront origin, e.g. "https://widgets.myshopify.com"

    Returns:
        Markdown text, lines joined with a single newline
    """
    shop_info = _mapping(shop_info)
    base_url = _text(shop_base_url).rstrip("/")
    host = urlparse(base_url).hostname or base_url
    currency = _text(shop_info.get("currency")) or DEFAULT_CURRENCY

    lines = _shop_lines(shop_info, base_url, host)
    lines.extend(["## Products", ""])
    for product in _sequence(products):
        lines.extend(_product_lines(_mapping(product), base_url, currency))

    return "\n".join(lines)
