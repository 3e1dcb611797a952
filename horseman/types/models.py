"""Value objects passed to and returned from the browser."""

from typing import Union, Optional, List, Dict, Any, Callable, Literal
from pydantic import BaseModel, Field, ConfigDict, model_validator
from enum import Enum


class KeyboardEventType(str, Enum):
    """Keyboard event kinds accepted by type() and keyboard_event()."""
    KEYPRESS = "keypress"
    KEYUP = "keyup"
    KEYDOWN = "keydown"


class MouseEventType(str, Enum):
    """Mouse event kinds accepted by mouse_event()."""
    MOUSEUP = "mouseup"
    MOUSEDOWN = "mousedown"
    MOUSEMOVE = "mousemove"
    DOUBLECLICK = "doubleclick"
    CLICK = "click"


class ImageType(str, Enum):
    """Image formats for base64 captures."""
    PNG = "PNG"
    GIF = "GIF"
    JPEG = "JPEG"


class PaperFormat(str, Enum):
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    LEGAL = "Legal"
    LETTER = "Letter"
    TABLOID = "Tabloid"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class Viewport(BaseModel):
    """Browser viewport size."""
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class Cookie(BaseModel):
    """A browser cookie."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    value: Optional[str] = None
    domain: Optional[str] = None
    path: Optional[str] = None
    url: Optional[str] = None
    expires: Optional[float] = None
    http_only: Optional[bool] = Field(default=None, alias="httpOnly")
    secure: Optional[bool] = None
    same_site: Optional[Literal["Strict", "Lax", "None"]] = Field(default=None, alias="sameSite")

    @classmethod
    def from_playwright(cls, data: Dict[str, Any]) -> 'Cookie':
        """Build a cookie from a Playwright cookie dict."""
        expires = data.get("expires")
        return cls(
            name=data.get("name"),
            value=data.get("value"),
            domain=data.get("domain"),
            path=data.get("path"),
            expires=expires if expires is not None and expires > 0 else None,
            http_only=data.get("httpOnly"),
            secure=data.get("secure"),
            same_site=data.get("sameSite"),
        )

    def to_playwright(self, default_url: Optional[str] = None) -> Dict[str, Any]:
        """
        Convert to the dict shape BrowserContext.add_cookies() expects.

        Playwright needs either a url or a domain and path. When the cookie
        carries neither, it is scoped to ``default_url``.

        Raises:
            ValueError: If the cookie has no name or cannot be scoped
        """
        if not self.name:
            raise ValueError("cookie requires a name")

        cookie: Dict[str, Any] = {"name": self.name, "value": self.value or ""}
        if self.url:
            cookie["url"] = self.url
        elif self.domain:
            cookie["domain"] = self.domain
            cookie["path"] = self.path or "/"
        elif default_url and default_url.startswith(("http://", "https://")):
            cookie["url"] = default_url
        else:
            raise ValueError(f"cookie '{self.name}' needs a domain or url")

        # session cookies have no expiry
        if self.expires is not None and self.expires > 0:
            cookie["expires"] = self.expires
        if self.http_only is not None:
            cookie["httpOnly"] = self.http_only
        if self.secure is not None:
            cookie["secure"] = self.secure
        if self.same_site is not None:
            cookie["sameSite"] = self.same_site
        return cookie


class Area(BaseModel):
    """
    A rectangle on the page, either an explicit box or margins from the edges.

    With both ``width`` and ``height`` the box starts at (``left``, ``top``).
    Otherwise missing dimensions are whatever remains of the page after the
    edge margins.
    """
    width: Optional[float] = None
    height: Optional[float] = None
    left: Optional[float] = None
    right: Optional[float] = None
    top: Optional[float] = None
    bottom: Optional[float] = None

    def to_clip(self, page_width: float, page_height: float) -> Dict[str, float]:
        """Resolve against the page size into a screenshot clip."""
        x = self.left or 0
        y = self.top or 0
        if self.width is not None:
            width = self.width
        else:
            width = page_width - x - (self.right or 0)
        if self.height is not None:
            height = self.height
        else:
            height = page_height - y - (self.bottom or 0)

        if width <= 0 or height <= 0:
            raise ValueError(
                f"area resolves to an empty rectangle ({width}x{height})"
            )
        return {"x": x, "y": y, "width": width, "height": height}


# Placeholders the browser fills in when rendering header/footer templates
PAGE_NUMBER = '<span class="pageNumber"></span>'
TOTAL_PAGES = '<span class="totalPages"></span>'


class PaperSizeElement(BaseModel):
    """PDF header or footer."""
    height: str
    contents: Union[str, Callable[[Any, Any], str]]

    def to_template(self) -> str:
        """
        Render the element as an HTML template.

        A callable receives placeholder markup instead of numbers, so
        ``lambda page, pages: f"{page} of {pages}"`` becomes a template the
        browser numbers per page.
        """
        if callable(self.contents):
            body = self.contents(PAGE_NUMBER, TOTAL_PAGES)
        else:
            body = self.contents
        return (
            f'<div style="font-size:10px;width:100%;height:{self.height};'
            f'padding:0 0.5in;">{body}</div>'
        )


class PaperSize(BaseModel):
    """Paper description for PDF rendering, by named format or custom size."""
    format: Optional[PaperFormat] = None
    orientation: Orientation = Orientation.PORTRAIT
    width: Optional[str] = None
    height: Optional[str] = None
    margin: str = "0.5in"
    header: Optional[PaperSizeElement] = None
    footer: Optional[PaperSizeElement] = None

    @model_validator(mode="after")
    def _check_dimensions(self) -> 'PaperSize':
        if (self.width is None) != (self.height is None):
            raise ValueError("custom paper size needs both width and height")
        if self.width is None and self.format is None:
            self.format = PaperFormat.LETTER
        return self

    def to_pdf_options(self) -> Dict[str, Any]:
        """Keyword arguments for Page.pdf()."""
        options: Dict[str, Any] = {"print_background": True}
        if self.width is not None:
            options["width"] = self.width
            options["height"] = self.height
        else:
            options["format"] = self.format.value
            options["landscape"] = self.orientation is Orientation.LANDSCAPE

        margin = {
            "top": self.margin,
            "right": self.margin,
            "bottom": self.margin,
            "left": self.margin,
        }
        if self.header or self.footer:
            options["display_header_footer"] = True
            # An empty template hides the browser's default date/title line
            options["header_template"] = self.header.to_template() if self.header else "<span></span>"
            options["footer_template"] = self.footer.to_template() if self.footer else "<span></span>"
            if self.header:
                margin["top"] = self.header.height
            if self.footer:
                margin["bottom"] = self.footer.height
        options["margin"] = margin
        return options


class TypeOptions(BaseModel):
    """Options for type()."""
    event_type: KeyboardEventType = KeyboardEventType.KEYPRESS
    modifiers: Union[str, int, None] = None


class WaitForOptions(BaseModel):
    """Options form of wait_for()."""
    fn: str
    args: List[Any] = Field(default_factory=list)
    value: Any = True
    timeout: Optional[int] = Field(default=None, gt=0)


class InitResult(BaseModel):
    """Result from launching a Horseman session."""
    session_id: str
    browser: str
    browser_version: Optional[str] = None
    debugger_url: Optional[str] = None
