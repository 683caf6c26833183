UNCATEGORIZED = "Uncategorized"
UNCATEGORIZED_COLOR = "#a3a3a3"

DEFAULT_CATEGORIES = [
    {"name": "Travel", "color": "#6366f1"},
    {"name": "Meals", "color": "#f59e0b"},
    {"name": "Accommodation", "color": "#8b5cf6"},
    {"name": "Office Supplies", "color": "#06b6d4"},
    {"name": "Software/Subscriptions", "color": "#3b82f6"},
    {"name": "Transportation", "color": "#22c55e"},
    {"name": "Communication", "color": "#ec4899"},
    {"name": "Professional Services", "color": "#14b8a6"},
    {"name": "Equipment", "color": "#f97316"},
    {"name": "Miscellaneous", "color": "#a3a3a3"},
]
