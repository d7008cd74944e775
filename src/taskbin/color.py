# SPDX-License-Identifier: MIT

# Color constant for completed tasks
COMPLETED_TASK_COLOR = "bright_black"

# Color constant for entries in the recycle bin
RECYCLED_TASK_COLOR = "grey50"

CATEGORY_COLORS = {
    "home": "green",
    "school": "blue",
    "shopping": "yellow",
}


def get_category_color(category: str) -> str:
    """Return the display color for a category, white when it has none."""
    return CATEGORY_COLORS.get(category, "white")
