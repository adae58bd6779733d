import matplotlib.pyplot as plt
import numpy as np


def plot_fault_counts(results, filename, title="Page Faults by Policy"):
    """Bar chart of {policy: fault count}, saved to filename"""
    names = list(results.keys())
    faults = [results[name] for name in names]

    fig, ax = plt.subplots(figsize=(8, 5))
    bars = ax.bar(names, faults, color=['#4c72b0', '#dd8452', '#55a868', '#c44e52'][:len(names)])
    for bar, value in zip(bars, faults):
        ax.annotate(f"{value}", (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    ha='center', va='bottom', fontsize=9)
    ax.set_ylabel('Page Faults')
    ax.set_title(title)
    ax.grid(True, axis='y', alpha=0.3)
    fig.tight_layout()
    fig.savefig(filename)
    plt.close(fig)
    return filename


def plot_frame_sweep(frame_counts, sweep, filename, title="Page Faults vs Frames"):
    """One line per policy: fault count against number of frames"""
    frame_counts = np.asarray(list(frame_counts))

    fig, ax = plt.subplots(figsize=(10, 6))
    for name, faults in sweep.items():
        ax.plot(frame_counts, faults, marker='o', linewidth=2, label=name)
    ax.set_xlabel('Frames')
    ax.set_ylabel('Page Faults')
    ax.set_xticks(frame_counts)
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(filename)
    plt.close(fig)
    return filename
