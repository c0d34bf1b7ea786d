"""Visualization utilities for CPPNs and their frames.

`visualize_cppn_graph` draws the network as a layered graph using `networkx`
and `matplotlib`; `plot_frame` shows a single rendered frame.
"""
import matplotlib.pyplot as plt
import networkx as nx
import numpy as np

from loop_cppn.cppn import CPPN
from loop_cppn.features import ColorMode
from loop_cppn.render import Frame

INPUT_LABELS = ("x", "y", "r", "z1", "z2")


def build_graph(cppn: CPPN) -> nx.DiGraph:
    """Builds a directed graph with one node per neuron.

    Nodes are `(depth, unit)` tuples, depth 0 being the inputs. Edges carry
    the connection weight; bias weights are left out.
    """
    G = nx.DiGraph()
    for unit in range(cppn.num_inputs):
        label = INPUT_LABELS[unit] if cppn.num_inputs == len(INPUT_LABELS) else f"in{unit}"
        G.add_node((0, unit), label=label)

    for depth, layer in enumerate(cppn.layers, start=1):
        weights = np.asarray(layer.weights)
        for unit in range(layer.output_size):
            G.add_node((depth, unit), label=layer.activation)
            for src in range(layer.input_size):
                G.add_edge((depth - 1, src), (depth, unit), weight=float(weights[src, unit]))
    return G


def layered_layout(cppn: CPPN) -> dict:
    """Positions every neuron at `(x, depth)`, centring each layer around x = 0."""
    sizes = [cppn.num_inputs] + [layer.output_size for layer in cppn.layers]
    pos = {}
    for depth, count in enumerate(sizes):
        for unit in range(count):
            pos[(depth, unit)] = ((unit - (count - 1) / 2.0), float(depth))
    return pos


def visualize_cppn_graph(cppn: CPPN, show: bool = True):
    """Draws the network with edge widths proportional to |weight|.

    Returns:
        The matplotlib figure.
    """
    G = build_graph(cppn)
    pos = layered_layout(cppn)
    labels = nx.get_node_attributes(G, "label")

    fig = plt.figure()
    nx.draw_networkx_nodes(G, pos, node_color="lightblue", node_size=300)
    nx.draw_networkx_labels(G, pos, labels=labels, font_size=6)
    widths = [abs(G.edges[u, v]["weight"]) for u, v in G.edges()]
    nx.draw_networkx_edges(G, pos, arrows=False, width=widths, alpha=0.4)

    plt.title("CPPN Network Graph (Layered Layout)")
    plt.axis("off")
    if show:
        plt.show()
    return fig


def plot_frame(frame: Frame, show: bool = True):
    """Shows one rendered frame.

    Returns:
        The matplotlib figure.
    """
    fig = plt.figure()
    if frame.color_mode is ColorMode.GRAY:
        plt.imshow(frame.pixels, cmap="gray", vmin=0, vmax=255)
    else:
        plt.imshow(frame.pixels)
    plt.title(f"CPPN frame ({frame.width}x{frame.height})")
    plt.axis("off")
    if show:
        plt.show()
    return fig
