"""
Renderer boundary.

``create_graph_data`` turns an engine snapshot into the plain nodes/links
dict the front-end consumes; ``create_figure`` draws that dict with plotly,
and ``render_png`` turns the same figure into the report snapshot.
All are pure functions of state.
"""

import plotly.graph_objs as go

from netviz.settings import settings

BG_COLOR = "#000"
NODE_COLOR = "#00ffff"
EDGE_COLOR = "rgba(0, 255, 255, 0.4)"
HIGHLIGHT_COLOR = "#00ff88"
SENDER_COLOR = "#ffd700"
RECEIVER_COLOR = "#ff1493"


# ---------- GRAPH DATA ----------

def create_graph_data(snapshot):
    hl = snapshot.highlight
    segment = tuple(hl.segment) if hl.segment else None
    return {
        "nodes": [
            {
                "id": n.label,
                "x": n.x,
                "y": n.y,
                "isSender": n.label == snapshot.sender,
                "isReceiver": n.label == snapshot.receiver,
                "highlight": n.label == hl.node,
            }
            for n in snapshot.nodes
        ],
        "links": [
            {
                "source": e.source,
                "target": e.target,
                "directed": e.directed,
                "highlight": segment is not None and _on_segment(e, segment),
            }
            for e in snapshot.edges
        ],
    }


def _on_segment(edge, segment):
    a, b = segment
    if (edge.source, edge.target) == (a, b):
        return True
    return not edge.directed and (edge.source, edge.target) == (b, a)


def build_info_dicts(model):
    """Incoming/outgoing edges per node and a lookup per edge, via networkx."""
    G = model.to_networkx()
    node_info = {
        node: {
            "incoming": [(u, v) for u, v in G.in_edges(node)],
            "outgoing": [(u, v) for u, v in G.out_edges(node)],
        }
        for node in G.nodes()
    }
    edge_info = {
        f"{u}->{v}": {"source": u, "target": v, "directed": d["directed"]}
        for u, v, d in G.edges(data=True)
    }
    return node_info, edge_info


# ---------- FIGURE ----------

def _click_grid(width, height, step):
    # invisible points covering the canvas so a click anywhere reports (x, y)
    xs, ys = [], []
    for x in range(0, width + 1, step):
        for y in range(0, height + 1, step):
            xs.append(x)
            ys.append(y)
    return go.Scatter(
        x=xs, y=ys, mode="markers",
        marker=dict(size=step, color="rgba(0,0,0,0)"),
        hoverinfo="none", showlegend=False, name="canvas",
    )


def _node_hover(label, node_info):
    info = (node_info or {}).get(label)
    if not info:
        return label
    lines = [f"<b>{label}</b>", f"Outgoing ({len(info['outgoing'])}):"]
    lines += [f"{u} → {v}" for u, v in info["outgoing"]]
    lines.append(f"Incoming ({len(info['incoming'])}):")
    lines += [f"{u} → {v}" for u, v in info["incoming"]]
    return "<br>".join(lines)


def create_figure(graph_data, width=None, height=None, node_info=None):
    width = width or settings.CANVAS_WIDTH
    height = height or settings.CANVAS_HEIGHT
    pos = {n["id"]: (n["x"], n["y"]) for n in graph_data["nodes"]}

    fig = go.Figure()
    fig.add_trace(_click_grid(width, height, settings.CLICK_GRID_STEP))

    annotations = []
    for link in graph_data["links"]:
        (x0, y0), (x1, y1) = pos[link["source"]], pos[link["target"]]
        color = HIGHLIGHT_COLOR if link["highlight"] else EDGE_COLOR
        fig.add_trace(go.Scatter(
            x=[x0, x1, None], y=[y0, y1, None], mode="lines",
            line=dict(width=4 if link["highlight"] else 2, color=color),
            hoverinfo="text", text=f"{link['source']} → {link['target']}",
            showlegend=False,
        ))
        if link["directed"]:
            annotations.append(dict(
                x=x1, y=y1, ax=x0, ay=y0, xref="x", yref="y", axref="x", ayref="y",
                showarrow=True, arrowhead=2, arrowsize=1.2, arrowwidth=2,
                arrowcolor=color, standoff=settings.NODE_DRAW_RADIUS, text="",
            ))

    nodes = graph_data["nodes"]
    colors, line_colors = [], []
    for n in nodes:
        if n["isSender"]:
            line_colors.append(SENDER_COLOR)
        elif n["isReceiver"]:
            line_colors.append(RECEIVER_COLOR)
        else:
            line_colors.append(NODE_COLOR)
        colors.append(HIGHLIGHT_COLOR if n["highlight"] else BG_COLOR)

    fig.add_trace(go.Scatter(
        x=[n["x"] for n in nodes], y=[n["y"] for n in nodes],
        mode="markers+text", text=[n["id"] for n in nodes],
        textfont=dict(color=NODE_COLOR), textposition="middle center",
        marker=dict(size=settings.NODE_DRAW_RADIUS * 2, color=colors,
                    line=dict(width=2, color=line_colors)),
        hovertext=[_node_hover(n["id"], node_info) for n in nodes],
        hoverinfo="text", showlegend=False, name="nodes",
    ))

    fig.update_layout(
        annotations=annotations,
        plot_bgcolor=BG_COLOR, paper_bgcolor=BG_COLOR,
        xaxis=dict(range=[0, width], visible=False, fixedrange=True),
        # canvas y grows downwards
        yaxis=dict(range=[height, 0], visible=False, fixedrange=True),
        margin=dict(l=0, r=0, b=0, t=0),
        height=height, showlegend=False, clickmode="event",
    )
    return fig


def engine_figure(engine, width=None, height=None):
    """Figure for the engine's current state, node hover listing its edges."""
    node_info, _ = build_info_dicts(engine.model)
    return create_figure(create_graph_data(engine.snapshot()), width, height, node_info)


def render_png(engine):
    # static export goes through kaleido
    return engine_figure(engine).to_image(format="png", width=settings.CANVAS_WIDTH,
                                          height=settings.CANVAS_HEIGHT)
