"""Keyboard helpers: legacy numeric key codes and modifier parsing."""

from typing import List, Union

# Legacy numeric key codes (Qt key values) for keys without a printable character
KEY_CODES = {
    16777216: "Escape",
    16777217: "Tab",
    16777219: "Backspace",
    16777220: "Enter",
    16777221: "Enter",
    16777222: "Insert",
    16777223: "Delete",
    16777232: "Home",
    16777233: "End",
    16777234: "ArrowLeft",
    16777235: "ArrowUp",
    16777236: "ArrowRight",
    16777237: "ArrowDown",
    16777238: "PageUp",
    16777239: "PageDown",
    16777248: "Shift",
    16777249: "Control",
    16777250: "Meta",
    16777251: "Alt",
}
KEY_CODES.update({16777264 + n: f"F{n + 1}" for n in range(12)})

# Legacy modifier bit flags
MODIFIER_FLAGS = (
    (0x02000000, "Shift"),
    (0x04000000, "Control"),
    (0x08000000, "Alt"),
    (0x10000000, "Meta"),
)

_MODIFIER_NAMES = {
    "shift": "Shift",
    "ctrl": "Control",
    "control": "Control",
    "alt": "Alt",
    "meta": "Meta",
    "cmd": "Meta",
    "command": "Meta",
}


def key_name(key: Union[str, int]) -> str:
    """
    Resolve a key to the name the browser keyboard API expects.

    Strings are passed through; integers are looked up as legacy key codes
    and otherwise treated as character codes.
    """
    if isinstance(key, str):
        return key
    if key in KEY_CODES:
        return KEY_CODES[key]
    return chr(key)


def parse_modifiers(modifiers: Union[str, int, None]) -> List[str]:
    """
    Parse modifiers into browser key names.

    Accepts a legacy bitmask or a string such as ``"shift+ctrl"``; keypad
    and unknown names are ignored.
    """
    if not modifiers:
        return []
    if isinstance(modifiers, int):
        return [name for flag, name in MODIFIER_FLAGS if modifiers & flag]

    keys: List[str] = []
    for part in modifiers.replace(",", "+").split("+"):
        name = _MODIFIER_NAMES.get(part.strip().lower())
        if name and name not in keys:
            keys.append(name)
    return keys
