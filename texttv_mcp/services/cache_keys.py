"""Cache key builders.

Each family starts with its own literal tag. Handlers that share a family
(news, sports and TV schedule all fetch page ranges) add a domain prefix on
top, e.g. ``news:range:101-103:html``.
"""


def _text_format(include_plain_text: bool) -> str:
    return "plain" if include_plain_text else "html"


def page_key(page_num: int, include_plain_text: bool = False) -> str:
    return f"page:{page_num}:{_text_format(include_plain_text)}"


def page_range_key(start: int, end: int, include_plain_text: bool = False) -> str:
    return f"range:{start}-{end}:{_text_format(include_plain_text)}"


def search_key(query: str, start_page: int, end_page: int) -> str:
    return f"search:{query}:{start_page}-{end_page}"


def category_key(category: str, include_content: bool = False) -> str:
    return f"category:{category}:{'content' if include_content else 'meta'}"
