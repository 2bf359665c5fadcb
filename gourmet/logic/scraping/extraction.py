"""Recipe extraction pipeline.

Turns a fetched recipe page into a RecipeCandidate using, in order:
1. JSON-LD structured data (Schema.org Recipe)
2. hand-picked selectors for known platforms (Cookidoo, Chefkoch)
3. generic selectors (first <h1>, ingredient lists, og:image)

Later strategies only fill fields that are still empty. RecipeScraper wraps
the pipeline with URL validation and page fetching and never raises.
"""
import html
import json
import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from gourmet.domain.Ingredient import Ingredient
from gourmet.domain.RecipeCandidate import RecipeCandidate
from gourmet.logic.scraping.ingredient_parser import parse_ingredient_line
from gourmet.utilities.constants import COOKIDOO_TAG
from gourmet.utilities.errors import ExtractionError

logger = logging.getLogger(__name__)

_FRACTIONS = {"½": "1/2", "¼": "1/4", "¾": "3/4"}

# Rows this short are labels or stray markup, not ingredients
_MIN_ROW_LENGTH = 4


def host_of(url: str) -> str:
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


def is_cookidoo(url: str) -> bool:
    """cookidoo.de, cookidoo.at, cookidoo.international, ..."""
    return host_of(url).split(".")[0] == "cookidoo"


def is_chefkoch(url: str) -> bool:
    host = host_of(url)
    return host == "chefkoch.de" or host.endswith(".chefkoch.de")


def _text(node) -> str:
    return " ".join(node.get_text(" ", strip=True).split()) if node is not None else ""


def _clean_ingredient_text(text: str) -> str:
    text = html.unescape(text or "")
    for symbol, replacement in _FRACTIONS.items():
        text = text.replace(symbol, replacement)
    return text


def _parse_rows(rows: List[str]) -> List[Ingredient]:
    parsed = (parse_ingredient_line(_clean_ingredient_text(r)) for r in rows)
    return [ing for ing in parsed if ing is not None]


def _is_complete(candidate: RecipeCandidate) -> bool:
    return bool(candidate.name and candidate.ingredients and candidate.image)


def _fill_empty(target: RecipeCandidate, found: RecipeCandidate):
    if not target.name and found.name:
        target.name = found.name
    if not target.ingredients and found.ingredients:
        target.ingredients = found.ingredients
    if not target.image and found.image:
        target.image = found.image
    if not target.instructions and found.instructions:
        target.instructions = found.instructions
    if not target.description and found.description:
        target.description = found.description


# --- JSON-LD -----------------------------------------------------------------

def _is_recipe_type(value: Any) -> bool:
    if isinstance(value, list):
        return "Recipe" in value
    return value == "Recipe"


def find_recipe_node(data: Any) -> Optional[Dict[str, Any]]:
    """Depth-first search for the Recipe object (top level, lists, @graph, nested)."""
    if isinstance(data, dict):
        if _is_recipe_type(data.get("@type")):
            return data
        for value in data.values():
            found = find_recipe_node(value)
            if found:
                return found
    elif isinstance(data, list):
        for item in data:
            found = find_recipe_node(item)
            if found:
                return found
    return None


def _image_from_ld(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return _image_from_ld(value[0]) if value else ""
    if isinstance(value, dict):
        return str(value.get("url") or value.get("contentUrl") or "").strip()
    return ""


def _instructions_from_ld(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    steps: List[str] = []
    if isinstance(value, list):
        for item in value:
            steps.extend(_instructions_from_ld(item))
    elif isinstance(value, dict):
        kind = value.get("@type")
        if kind == "HowToSection" or (isinstance(kind, list) and "HowToSection" in kind):
            steps.extend(_instructions_from_ld(value.get("itemListElement") or []))
        elif value.get("text"):
            steps.append(str(value["text"]).strip())
        elif value.get("name"):
            steps.append(str(value["name"]).strip())
    return steps


class StructuredDataStrategy:
    name = "json-ld"

    def applies(self, url: str, partial: RecipeCandidate) -> bool:
        return True

    def extract(self, soup: BeautifulSoup, url: str) -> RecipeCandidate:
        found = RecipeCandidate(recipe_link=url)
        for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.debug("Skipping malformed JSON-LD block on %s: %s", url, e)
                continue
            node = find_recipe_node(data)
            if not node:
                continue
            found.name = html.unescape(str(node.get("name") or "")).strip()
            found.image = _image_from_ld(node.get("image"))
            ingredients = node.get("recipeIngredient") or node.get("ingredients") or []
            if isinstance(ingredients, str):
                ingredients = [ingredients]
            found.ingredients = _parse_rows([str(i) for i in ingredients])
            steps = _instructions_from_ld(node.get("recipeInstructions"))
            found.instructions = html.unescape("\n".join(steps))
            found.description = html.unescape(str(node.get("description") or "")).strip()
            break
        return found


# --- selectors ---------------------------------------------------------------

def _class_contains(fragment: str) -> Callable[[Any], bool]:
    def check(classes) -> bool:
        if not classes:
            return False
        if isinstance(classes, str):
            classes = classes.split()
        return any(fragment in c for c in classes)
    return check


def _li_with_units(units: List[str]) -> Callable[[BeautifulSoup], List[Any]]:
    """<li> elements whose own text mentions one of the unit markers ("g ", "ml ")."""
    def select(soup: BeautifulSoup) -> List[Any]:
        rows = []
        for li in soup.find_all("li"):
            own_text = "".join(li.find_all(string=True, recursive=False))
            if any(u in own_text for u in units):
                rows.append(li)
        return rows
    return select


def _rows_of(nodes: List[Any]) -> List[str]:
    return [t for t in (_text(n) for n in nodes) if len(t) >= _MIN_ROW_LENGTH]


class SiteSpecificStrategy:
    """Selectors for platforms whose pages often lack usable structured data."""
    name = "site-specific"

    def applies(self, url: str, partial: RecipeCandidate) -> bool:
        if partial.name and partial.ingredients:
            return False
        return is_cookidoo(url) or is_chefkoch(url)

    def extract(self, soup: BeautifulSoup, url: str) -> RecipeCandidate:
        if is_cookidoo(url):
            return self._cookidoo(soup, url)
        return self._chefkoch(soup, url)

    def _cookidoo(self, soup: BeautifulSoup, url: str) -> RecipeCandidate:
        found = RecipeCandidate(recipe_link=url)
        title = soup.find("h1", class_="recipe-title") or soup.find("h1", class_=_class_contains("title"))
        found.name = _text(title)

        nodes = soup.select("ul.ingredients-list li")
        nodes += soup.find_all("div", class_=_class_contains("ingredient"))
        nodes += _li_with_units(["g ", "ml "])(soup)
        seen, rows = set(), []
        for row in _rows_of(nodes):
            if row not in seen:
                seen.add(row)
                rows.append(row)
        found.ingredients = _parse_rows(rows)

        image = soup.find("img", class_="recipe-image")
        if image is None:
            image = soup.find("img", src=lambda s: bool(s) and "recipe" in s and s.startswith("http"))
        if image is not None and image.get("src"):
            found.image = image["src"]
        return found

    def _chefkoch(self, soup: BeautifulSoup, url: str) -> RecipeCandidate:
        found = RecipeCandidate(recipe_link=url)
        found.name = _text(soup.find("h1"))
        rows = []
        for tr in soup.select("table.ingredients tr"):
            cells = [_text(td) for td in tr.find_all("td")]
            row = " ".join(c for c in cells if c)
            if len(row) >= _MIN_ROW_LENGTH:
                rows.append(row)
        found.ingredients = _parse_rows(rows)
        og = soup.find("meta", attrs={"property": "og:image"})
        if og is not None and og.get("content"):
            found.image = og["content"]
        return found


class GenericStrategy:
    name = "generic"

    SELECTORS = [
        lambda soup: soup.select("ul[class*=ingredient] li"),
        lambda soup: soup.find_all("div", class_=_class_contains("ingredient")),
        _li_with_units(["g ", "ml ", "EL ", "TL "]),
    ]

    def applies(self, url: str, partial: RecipeCandidate) -> bool:
        return True

    def extract(self, soup: BeautifulSoup, url: str) -> RecipeCandidate:
        found = RecipeCandidate(recipe_link=url)
        found.name = _text(soup.find("h1"))
        # first selector with usable rows wins, no merging across selectors
        for select in self.SELECTORS:
            rows = _rows_of(select(soup))
            if rows:
                found.ingredients = _parse_rows(rows)
                break
        og = soup.find("meta", attrs={"property": "og:image"})
        if og is not None and og.get("content"):
            found.image = og["content"]
        return found


class RecipeExtractor:
    """Runs the strategies in order and turns the result into a RecipeCandidate.

    ``fetcher`` only needs ``fetch_image(url) -> str``; without one the image
    URL is kept as found.
    """

    def __init__(self, fetcher=None, strategies: Optional[list] = None):
        self.fetcher = fetcher
        self.strategies = strategies if strategies is not None else [
            StructuredDataStrategy(), SiteSpecificStrategy(), GenericStrategy(),
        ]

    def run_strategies(self, page_html: str, source_url: str) -> RecipeCandidate:
        soup = BeautifulSoup(page_html or "", "html.parser")
        candidate = RecipeCandidate(recipe_link=source_url)
        for strategy in self.strategies:
            if _is_complete(candidate):
                break
            if not strategy.applies(source_url, candidate):
                continue
            found = strategy.extract(soup, source_url)
            logger.debug("%s strategy on %s: name=%r, %d ingredients", strategy.name, source_url,
                         found.name, len(found.ingredients))
            _fill_empty(candidate, found)
        return candidate

    async def extract(self, page_html: str, source_url: str) -> RecipeCandidate:
        candidate = self.run_strategies(page_html, source_url)
        if not candidate.name and not candidate.ingredients:
            raise ExtractionError(ExtractionError.UNPARSEABLE, "No recipe data found on this page")
        if is_cookidoo(source_url) and COOKIDOO_TAG not in candidate.tags:
            candidate.tags.append(COOKIDOO_TAG)
        if candidate.image:
            try:
                image_url = urljoin(source_url, candidate.image)
            except ValueError:
                logger.warning("Ignoring malformed image URL %r on %s", candidate.image, source_url)
                image_url = ""
            if not image_url:
                candidate.image = ""
            elif self.fetcher is not None:
                candidate.image = await self.fetcher.fetch_image(image_url)
            else:
                candidate.image = image_url
        return candidate


class ScrapeResult:
    def __init__(self, url: str, candidate: Optional[RecipeCandidate] = None,
                 error_kind: Optional[str] = None, error: Optional[str] = None):
        self.url = url
        self.candidate = candidate
        self.error_kind = error_kind
        self.error = error

    @property
    def success(self) -> bool:
        return self.candidate is not None

    def __str__(self) -> str:
        if self.success:
            return f"OK {self.url}: {self.candidate.name}"
        return f"FAILED {self.url}: {self.error_kind} ({self.error})"

    __repr__ = __str__

    def to_response(self):
        if self.success:
            return self.candidate.to_response()
        return {"success": False, "name": "", "ingredients": [], "notes": "", "image": "",
                "tags": [], "error": self.error, "errorKind": self.error_kind}


def validate_url(url: str) -> str:
    url = (url or "").strip()
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise ExtractionError(ExtractionError.INVALID_URL, f"Not a valid web address: {url!r}") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ExtractionError(ExtractionError.INVALID_URL, f"Not a valid web address: {url!r}")
    return url


class RecipeScraper:
    """URL in, ScrapeResult out. Every failure is reported, never raised."""

    def __init__(self, fetcher, extractor: Optional[RecipeExtractor] = None):
        self.fetcher = fetcher
        self.extractor = extractor or RecipeExtractor(fetcher)

    async def scrape(self, url: str) -> ScrapeResult:
        try:
            url = validate_url(url)
            page = await self.fetcher.fetch_page(url)
            candidate = await self.extractor.extract(page, url)
        except ExtractionError as e:
            logger.info("Scraping %s failed: %s (%s)", url, e.message, e.kind)
            return ScrapeResult(url, error_kind=e.kind, error=e.message)
        logger.info("Scraped %s: %r with %d ingredients", url, candidate.name, len(candidate.ingredients))
        return ScrapeResult(url, candidate=candidate)

    async def aclose(self):
        await self.fetcher.aclose()


__all__ = ["RecipeExtractor", "RecipeScraper", "ScrapeResult", "StructuredDataStrategy",
           "SiteSpecificStrategy", "GenericStrategy", "validate_url", "is_cookidoo"]
