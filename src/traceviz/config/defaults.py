"""
traceviz.config.defaults - Default configuration values.
"""

DEFAULT_CONFIG = {
    "layers": {
        # Upstream-to-downstream layer order. Empty means "infer from the
        # order tags appear in the dataset", which is best-effort only.
        "order": [],
    },
    "layout": {
        "bars": {
            "bar_width": 16,
            "height_per_node": 15,
            "min_bar_height": 30,
            "max_bar_height": 200,
            "bar_spacing": 15,
            "min_height": 150,
            "max_height": 800,
        },
        "flow": {
            "node_height": 24,
            "node_gap": 6,
            "node_width": 20,
            "top_padding": 20,
            "bottom_padding": 60,
            "width": 1200,
            "reorder": True,
        },
    },
    "colors": {
        "scheme": [
            "#e74c3c",
            "#3498db",
            "#2ecc71",
            "#f39c12",
            "#9b59b6",
            "#1abc9c",
            "#e67e22",
            "#95a5a6",
            "#34495e",
            "#c0392b",
        ],
        "unknown": "#7f8c8d",
    },
    "summary": {
        # Files never listed in per-file coverage.
        "skip_files": ["config.md"],
    },
}
