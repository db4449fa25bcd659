from __future__ import annotations

import base64
import io
from functools import lru_cache

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Circle, FancyBboxPatch

from .config import ReportConfig


LOGO_PX = 96


@lru_cache(maxsize=16)
def render_badge_png(initial: str, color: str, shape: str) -> bytes:
    """Rasterise the brand initial on a coloured badge.

    Uses the Agg canvas directly so no pyplot state is touched. PNG metadata
    is stripped so the bytes only depend on the arguments.
    """

    fig = Figure(figsize=(1, 1), dpi=LOGO_PX)
    FigureCanvasAgg(fig)
    fig.patch.set_alpha(0.0)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.axis("off")

    if shape == "ROUND":
        ax.add_patch(Circle((0.5, 0.5), 0.5, facecolor=color, edgecolor="none"))
    else:
        ax.add_patch(
            FancyBboxPatch(
                (0.06, 0.06), 0.88, 0.88,
                boxstyle="round,pad=0.06,rounding_size=0.12",
                facecolor=color,
                edgecolor="none",
            )
        )
    ax.text(0.5, 0.5, initial, ha="center", va="center", color="white", fontsize=40, fontweight="bold", family="sans-serif")

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=LOGO_PX, transparent=True, metadata={"Software": None})
    return buf.getvalue()


def logo_png(config: ReportConfig) -> bytes:
    if config.logo_path is not None:
        return config.logo_path.read_bytes()
    return render_badge_png(config.brand_initial, config.brand_color, config.logo_style)


def logo_data_uri(config: ReportConfig) -> str:
    encoded = base64.b64encode(logo_png(config)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
