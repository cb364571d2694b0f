"""
Ordered Tree Demo — Examples, shape statistics, and visualizations.

Generates:
- viz/*.png — Individual visualization files
- report.pdf — Comprehensive PDF report
"""

import os
import sys
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from ordered_tree import OrderedTree

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

SEVEN = [5, 3, 8, 1, 4, 7, 9]


def build(values):
    tree = OrderedTree()
    for v in values:
        tree.insert(v)
    return tree


def layout(tree):
    """Map each stored value to (in-order index, -depth) for plotting.

    Replaying the preorder sequence rebuilds the same shape, so each value's
    parent is found by descending through the values placed before it.
    """
    positions = {}
    edges = []
    order = {value: i for i, value in enumerate(tree.in_order())}
    children = {}
    root = None
    for value in tree.pre_order():
        children[value] = [None, None]
        if root is None:
            root = value
            positions[value] = (order[value], 0)
            continue
        parent, depth = root, 1
        while True:
            side = 0 if value < parent else 1
            if children[parent][side] is None:
                children[parent][side] = value
                break
            parent = children[parent][side]
            depth += 1
        edges.append((parent, value))
        positions[value] = (order[value], -depth)
    return positions, edges


def draw_tree(ax, tree, title, highlight=()):
    positions, edges = layout(tree)
    for parent, child in edges:
        (x0, y0), (x1, y1) = positions[parent], positions[child]
        ax.plot([x0, x1], [y0, y1], "-", color="gray", linewidth=1.5, zorder=1)
    for value, (x, y) in positions.items():
        color = "tomato" if value in highlight else "steelblue"
        ax.scatter(x, y, s=600, color=color, zorder=2)
        ax.text(x, y, str(value), ha="center", va="center", color="white",
                fontsize=11, fontweight="bold", zorder=3)
    ax.set_title(f"{title}\nheight={tree.height()} size={tree.size()} "
                 f"balanced={tree.is_balanced()}")
    ax.axis("off")
    if not positions:
        ax.text(0.5, 0.5, "(empty)", ha="center", va="center", transform=ax.transAxes)


def print_stats(tree):
    print(f"  height = {tree.height()}, size = {tree.size()}")
    print(f"  #leaves = {tree.count_leaves()}, #halves = {tree.count_halves()}")
    if tree.is_empty():
        print("  minimum = UNDEFINED, maximum = UNDEFINED")
    else:
        print(f"  minimum = {tree.min()}, maximum = {tree.max()}")
    print(f"  perfect = {tree.is_perfect()}, balanced = {tree.is_balanced()}")


def example_1_traversals():
    """Build a perfect tree and show the three traversal orders."""
    print("=" * 60)
    print("Example 1: Traversals of a Perfect Tree")
    print("=" * 60)

    tree = build(SEVEN)
    print(f"Inserted:  {SEVEN}")
    print(f"Preorder:  {tree.pre_order()}")
    print(f"Inorder:   {tree.in_order()}")
    print(f"Postorder: {tree.post_order()}")
    print_stats(tree)

    fig, ax = plt.subplots(figsize=(8, 5))
    draw_tree(ax, tree, "Insertion order 5 3 8 1 4 7 9")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_traversals.png", dpi=150)
    plt.close(fig)

    return fig, tree


def example_2_trim():
    """Repeatedly trim the leaves until the tree is empty."""
    print("\n" + "=" * 60)
    print("Example 2: Trimming Leaves")
    print("=" * 60)

    tree = build(SEVEN)
    snapshots = []
    while True:
        _, edges = layout(tree)
        parents = {parent for parent, _ in edges}
        leaves = [v for v in tree.in_order() if v not in parents]
        snapshots.append((build(tree.pre_order()), leaves))
        print(f"size={tree.size():2d}  leaves={leaves}")
        if tree.is_empty():
            break
        tree.trim()

    fig, axes = plt.subplots(1, len(snapshots), figsize=(4 * len(snapshots), 4))
    for i, (ax, (snapshot, leaves)) in enumerate(zip(axes, snapshots)):
        draw_tree(ax, snapshot, f"After {i} trim(s)", highlight=leaves)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_trim.png", dpi=150)
    plt.close(fig)

    return fig, snapshots


def example_3_removal():
    """Remove a node with two children; its in-order successor moves up."""
    print("\n" + "=" * 60)
    print("Example 3: Removal with Successor Promotion")
    print("=" * 60)

    values = [50, 30, 70, 20, 40, 35, 45]
    before = build(values)
    after = build(values)
    after.remove(30)
    print(f"Before: preorder {before.pre_order()}")
    print(f"After removing 30: preorder {after.pre_order()}")
    print(f"remove(99) on missing key -> {after.remove(99)}")

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    draw_tree(axes[0], before, "Before remove(30)", highlight=(30, 35))
    draw_tree(axes[1], after, "After remove(30)", highlight=(35,))
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_removal.png", dpi=150)
    plt.close(fig)

    return fig, after


def example_4_height_vs_size():
    """Average height of trees built from random permutations."""
    print("\n" + "=" * 60)
    print("Example 4: Height vs Size")
    print("=" * 60)

    sizes = np.array([8, 16, 32, 64, 128, 256, 512])
    n_trials = 30
    mean_heights = []
    std_heights = []
    for n in sizes:
        heights = np.array([build(np.random.permutation(n).tolist()).height()
                            for _ in range(n_trials)])
        mean_heights.append(heights.mean())
        std_heights.append(heights.std())
        print(f"n={n:4d}  mean height={heights.mean():6.2f}  "
              f"min={heights.min():3d}  max={heights.max():3d}")
    mean_heights = np.array(mean_heights)
    std_heights = np.array(std_heights)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.errorbar(sizes, mean_heights, yerr=std_heights, fmt="o-", capsize=4,
                color="steelblue", label="Random insertion order")
    ax.plot(sizes, np.floor(np.log2(sizes)), "g--", label="Perfect lower bound ⌊log₂ n⌋")
    ax.plot(sizes, sizes - 1, "r:", label="Sorted insertion (chain)")
    ax.set_xscale("log", base=2)
    ax.set_yscale("log")
    ax.set_xlabel("Number of keys")
    ax.set_ylabel("Tree height")
    ax.set_title("Unbalanced BST Height")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_height.png", dpi=150)
    plt.close(fig)

    return fig, mean_heights


def example_5_balance_rate():
    """Fraction of random trees that satisfy the local balance condition."""
    print("\n" + "=" * 60)
    print("Example 5: How Often Is a Random Tree Balanced?")
    print("=" * 60)

    sizes = np.arange(1, 21)
    n_trials = 200
    rates = []
    for n in sizes:
        balanced = sum(build(np.random.permutation(n).tolist()).is_balanced()
                       for _ in range(n_trials))
        rates.append(balanced / n_trials)
    rates = np.array(rates)
    for n, rate in zip(sizes[::4], rates[::4]):
        print(f"n={n:3d}  balanced in {rate:6.1%} of trials")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.bar(sizes, rates, color="steelblue", alpha=0.8)
    ax.set_xlabel("Number of keys")
    ax.set_ylabel("Fraction balanced")
    ax.set_title(f"Balanced Trees from Random Insertion ({n_trials} trials each)")
    ax.set_ylim(0, 1.05)
    ax.grid(True, alpha=0.3, axis="y")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "05_balance.png", dpi=150)
    plt.close(fig)

    return fig, rates


def generate_pdf_report(figures_data):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        # Title page
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "Ordered Tree", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "Unbalanced Binary Search Tree", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        # Summary page
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.95, "Summary", fontsize=24, ha="center", fontweight="bold")

        summary_text = """
This report demonstrates an unbalanced binary search tree of unique keys.

• Operations:
  - insert (overwrites equal keys), contains, remove, retrieve
  - preorder / inorder / postorder traversal with a callback
  - min / max, height, leaf and half-node counts
  - balance and perfect-shape checks, one-pass leaf trimming

• Key Findings:
  1. Random insertion order keeps height close to a small multiple of log₂ n
  2. Sorted insertion degenerates into a chain of height n - 1
  3. Local balance at every node becomes rare as random trees grow
  4. trim() removes only the leaves present when it is called
"""
        fig.text(0.1, 0.85, summary_text, fontsize=12, ha="left", va="top",
                 fontfamily="monospace", linespacing=1.5)
        pdf.savefig(fig)
        plt.close(fig)

        for title, filename in figures_data:
            fig_copy = plt.figure(figsize=(11, 8.5))
            fig_copy.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            img = plt.imread(VIZ_DIR / filename)
            ax = fig_copy.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(img)
            ax.axis("off")
            pdf.savefig(fig_copy)
            plt.close(fig_copy)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    print("\n" + "#" * 60)
    print("#" + " " * 21 + "ORDERED TREE DEMO" + " " * 20 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    figures = []

    example_1_traversals()
    figures.append(("Example 1: Traversals", "01_traversals.png"))

    example_2_trim()
    figures.append(("Example 2: Trim", "02_trim.png"))

    example_3_removal()
    figures.append(("Example 3: Removal", "03_removal.png"))

    example_4_height_vs_size()
    figures.append(("Example 4: Height vs Size", "04_height.png"))

    example_5_balance_rate()
    figures.append(("Example 5: Balance Rate", "05_balance.png"))

    generate_pdf_report(figures)

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print(f"  - report.pdf")


if __name__ == "__main__":
    main()
