"""Report Generator - Render coverage summary and health as a document.

Uses Jinja2 templates. Diagrams are not drawn here; the report carries
the same figures as text and tables.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from traceviz import __version__

if TYPE_CHECKING:
    from traceviz.session import RenderSession

TEMPLATES = {
    "markdown": "report.md.j2",
    "html": "report.html.j2",
}


class ReportGenerator:
    """Renders a RenderSession's summary and health sections.

    Args:
        session: A computed render session.
        version: Version string for the footer (defaults to the package version).
    """

    def __init__(self, session: RenderSession, version: str | None = None) -> None:
        self.session = session
        self.version = version if version is not None else __version__

    def generate(self, format: str = "markdown") -> str:
        """Render the report.

        Args:
            format: ``"markdown"`` or ``"html"``.

        Returns:
            The rendered document.
        """
        if format not in TEMPLATES:
            raise ValueError(f"Unknown report format: {format}")
        try:
            from jinja2 import Environment, PackageLoader, select_autoescape

            env = Environment(
                loader=PackageLoader("traceviz.report", "templates"),
                autoescape=select_autoescape(["html", "html.j2", "xml"]),
                trim_blocks=True,
                lstrip_blocks=True,
            )
            template = env.get_template(TEMPLATES[format])
        except ImportError:
            raise ImportError(
                "ReportGenerator requires the report extra. "
                "Install with: pip install traceviz[report]"
            )

        session = self.session
        return template.render(
            layer_order=session.layer_order,
            legend=[(name, session.colors.color(name)) for name in session.legend],
            coverage=session.coverage,
            summaries=session.summaries,
            health=session.health,
            tag_count=len(session.dataset.tags),
            link_count=len(session.direct_links),
            generated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            version=self.version,
        )
