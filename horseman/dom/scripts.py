"""Browser-side scripts evaluated in the current frame."""

# Single-element reads answer {found, value} so a null value can be told
# apart from a selector that matched nothing.

COUNT = "(selector) => document.querySelectorAll(selector).length"

VISIBLE = """
(selector) => Array.from(document.querySelectorAll(selector)).some((el) => {
    const style = window.getComputedStyle(el);
    if (style.visibility === 'hidden' || style.display === 'none') {
        return false;
    }
    return !!(el.offsetWidth || el.offsetHeight || el.getClientRects().length);
})
"""

TEXT = """
(selector) => Array.from(document.querySelectorAll(selector))
    .map((el) => el.textContent)
    .join('')
"""

PLAIN_TEXT = """
() => document.body ? document.body.innerText : document.documentElement.textContent
"""

INNER_HTML = """
(selector) => {
    const el = document.querySelector(selector);
    return el ? {found: true, value: el.innerHTML} : {found: false};
}
"""

GET_VALUE = """
(selector) => {
    const el = document.querySelector(selector);
    return el ? {found: true, value: el.value} : {found: false};
}
"""

SET_VALUE = """
({selector, value}) => {
    const el = document.querySelector(selector);
    if (!el) {
        return {found: false};
    }
    el.value = value;
    el.dispatchEvent(new Event('input', {bubbles: true}));
    el.dispatchEvent(new Event('change', {bubbles: true}));
    return {found: true};
}
"""

ATTRIBUTE = """
({selector, name}) => {
    const el = document.querySelector(selector);
    return el ? {found: true, value: el.getAttribute(name)} : {found: false};
}
"""

CSS_PROPERTY = """
({selector, name}) => {
    const el = document.querySelector(selector);
    if (!el) {
        return {found: false};
    }
    return {found: true, value: window.getComputedStyle(el).getPropertyValue(name)};
}
"""

SIZE = """
(selector) => {
    const el = document.querySelector(selector);
    if (!el) {
        return {found: false};
    }
    const rect = el.getBoundingClientRect();
    return {found: true, value: {width: rect.width, height: rect.height}};
}
"""

DOCUMENT_SIZE = """
() => ({
    width: Math.max(document.documentElement.scrollWidth, document.body ? document.body.scrollWidth : 0),
    height: Math.max(document.documentElement.scrollHeight, document.body ? document.body.scrollHeight : 0),
})
"""

SCROLL_TO = "([top, left]) => window.scrollTo(left, top)"

ZOOM = "(factor) => { document.documentElement.style.zoom = String(factor); }"

ELEMENT_FROM_POINT = "([x, y]) => document.elementFromPoint(x, y)"

ACTIVE_ELEMENT = "() => document.activeElement"

IS_FRAME_ELEMENT = "(el) => !!el && (el.tagName === 'IFRAME' || el.tagName === 'FRAME')"

