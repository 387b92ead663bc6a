import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from typing import Sequence

from .date_encoder import DateEncoder


def set_matplotlib_headless() -> None:
    """Configure matplotlib to use a headless backend."""
    matplotlib.use("Agg", force=True)


def plot_encoding_raster(encoder: DateEncoder, timestamps: Sequence, save_path: str,
                         title: str = "Date encoding") -> None:
    """Plot one row of active bits per timestamp, with field boundaries marked."""
    timestamps = list(timestamps)
    if not timestamps:
        raise ValueError("plot_encoding_raster needs at least one timestamp")
    data = encoder.encode_many(timestamps)

    fig, ax = plt.subplots(figsize=(12, max(3, 0.25 * len(timestamps) + 1)))
    cmap = ListedColormap(['white', 'black'])
    ax.imshow(data, cmap=cmap, aspect='auto', interpolation='nearest', vmin=0, vmax=1)

    for field in encoder.fields:
        if field.offset > 0:
            ax.axvline(field.offset - 0.5, color='red', linewidth=1)
        ax.text(field.offset + field.width / 2 - 0.5, -0.8, field.name,
                ha='center', va='bottom', fontsize=8)

    labels = [str(t) for t in timestamps]
    step = max(1, len(labels) // 20)
    ticks = np.arange(0, len(labels), step)
    ax.set_yticks(ticks)
    ax.set_yticklabels([labels[i] for i in ticks], fontsize=7)
    ax.set_xlabel('Bit')
    ax.set_title(title, pad=20)
    fig.tight_layout()
    fig.savefig(save_path)
    plt.close(fig)
