from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Optional

from matplotlib.figure import Figure

from catalog.config import APP_NAME, EXPORTS_DIR
from catalog.db.product_repository import InMemoryProductRepository
from catalog.utils import now


class ReportService:
    def __init__(self, repository: InMemoryProductRepository, exports_dir: Optional[Path] = None):
        self.repository = repository
        self.exports_dir = Path(exports_dir) if exports_dir else Path(EXPORTS_DIR)

    def stock_by_category(self) -> list[tuple[str, int]]:
        totals: dict[str, int] = defaultdict(int)
        for p in self.repository.find_all():
            totals[p.category or "(none)"] += p.stock_quantity
        return sorted(totals.items())

    def render_stock_chart(self, out_path: Optional[Path] = None) -> Path:
        """Bar chart of stock per category. Format follows the suffix (.png / .pdf)."""
        out_path = Path(out_path) if out_path else self.exports_dir / "stock_by_category.png"
        out_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.stock_by_category()
        fig = Figure(figsize=(10, 6))
        ax = fig.add_subplot(111)

        if data:
            labels = [item[0] for item in data]
            values = [item[1] for item in data]

            bars = ax.bar(labels, values, color="#6B4B3A", edgecolor="none")
            for bar in bars:
                h = bar.get_height()
                if h > 0:
                    ax.text(
                        bar.get_x() + bar.get_width() / 2, h, f"{h:,.0f}",
                        ha="center", va="bottom", fontsize=8,
                    )

            ax.set_xlabel("Category", fontsize=10)
            ax.set_ylabel("Units in stock", fontsize=10)
            ax.grid(axis="y", alpha=0.25)
            ax.spines["top"].set_visible(False)
            ax.spines["right"].set_visible(False)

            if len(labels) > 10:
                ax.tick_params(axis="x", rotation=45)
        else:
            ax.text(0.5, 0.5, "No products", ha="center", va="center",
                    fontsize=12, transform=ax.transAxes)
            ax.axis("off")

        ax.set_title(
            f"{APP_NAME} - stock by category ({now().strftime('%Y-%m-%d %H:%M')})",
            fontsize=12, pad=10,
        )
        fig.tight_layout()
        fig.savefig(out_path)
        return out_path
