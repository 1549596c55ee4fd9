"""Display colours for category colour tokens.

The core carries colour tokens through untouched; only the presentation layer
turns them into hex values.
"""

COLOR_HEX = {
    "bg-blue-500": "#3b82f6",
    "bg-green-500": "#10b981",
    "bg-purple-500": "#8b5cf6",
    "bg-yellow-500": "#f59e0b",
    "bg-pink-500": "#ec4899",
    "bg-red-500": "#ef4444",
    "bg-indigo-500": "#6366f1",
    "bg-teal-500": "#14b8a6",
    "bg-orange-500": "#f97316",
    "bg-gray-500": "#6b7280",
}

FALLBACK_HEX = "#3b82f6"


def color_hex(token: str) -> str:
    return COLOR_HEX.get(token, FALLBACK_HEX)
