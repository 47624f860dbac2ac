import io
import time

import dash
from dash import html, dcc
from dash_extensions.enrich import DashProxy, TriggerTransform, Trigger
from dash.dependencies import Output, Input, State

from netviz.actionlog import configure_logging
from netviz.engine import NetworkEngine
from netviz.graph_data import engine_figure
from netviz.modes import ModeKind
from netviz.settings import settings

# ---------- LAYOUT ----------

PANEL_STYLE = {
    "padding": "10px", "backgroundColor": "#111", "color": "#0ff",
    "border": "1px solid #0ff6", "borderRadius": "8px", "marginBottom": "10px",
    "fontFamily": "Arial, sans-serif",
}
BUTTON_STYLE = {"marginRight": "6px", "marginBottom": "6px"}

TOPOLOGY_OPTIONS = [
    {"label": name.capitalize(), "value": name}
    for name in ("bus", "star", "ring", "mesh", "tree", "custom")
]
ALGORITHM_OPTIONS = [
    {"label": "BFS (shortest path)", "value": "bfs"},
    {"label": "Topological sort (Kahn)", "value": "topo"},
]

MODE_TEXT = {
    ModeKind.IDLE: "Click empty canvas to add a node",
    ModeKind.ADDING_EDGE: "Add Edge: click node A, then node B",
    ModeKind.SELECTING_SENDER: "Click a node to pick the sender",
    ModeKind.SELECTING_RECEIVER: "Click a node to pick the receiver",
    ModeKind.CUSTOM_LINKING: "Custom topology: click two nodes to link them",
}


def _button(label, id_):
    return html.Button(label, id=id_, n_clicks=0, style=BUTTON_STYLE)


def build_layout(engine):
    snapshot = engine.snapshot()
    return html.Div([
        html.H2("Network Topology Playground", style={"color": "#0ff"}),
        html.Div([
            html.Div([
                html.Div([
                    html.Label("Topology"),
                    dcc.Dropdown(id="topology", options=TOPOLOGY_OPTIONS, value="bus",
                                 clearable=False),
                    _button("Build", "build-btn"),
                    _button("Reset", "reset-btn"),
                ], style=PANEL_STYLE),
                html.Div([
                    _button("Add Edge", "add-edge-btn"),
                    html.Label("Node"),
                    dcc.Dropdown(id="node-select", options=[], placeholder="— Choose Node —"),
                    _button("Delete Node", "delete-btn"),
                ], style=PANEL_STYLE),
                html.Div([
                    html.Label("Algorithm"),
                    dcc.Dropdown(id="algorithm", options=ALGORITHM_OPTIONS, value="bfs",
                                 clearable=False),
                    _button("Run", "run-algo-btn"),
                ], style=PANEL_STYLE),
                html.Div([
                    _button("Select Sender", "select-sender-btn"),
                    _button("Select Receiver", "select-receiver-btn"),
                    _button("Clear", "clear-selection-btn"),
                    html.Div(["Sender: ", html.Span("—", id="sender-label")]),
                    html.Div(["Receiver: ", html.Span("—", id="receiver-label")]),
                    dcc.Input(id="chat-input", type="text", placeholder="Message", value="",
                              debounce=False, style={"width": "70%"}),
                    _button("Send", "send-btn"),
                ], style=PANEL_STYLE),
                html.Div([
                    _button("Download Report", "download-btn"),
                    dcc.Download(id="report-download"),
                ], style=PANEL_STYLE),
            ], style={"width": "300px", "flexShrink": 0, "marginRight": "12px"}),

            html.Div([
                html.Div(id="mode-label", children=MODE_TEXT[snapshot.mode.kind],
                         style={"color": "#0ff", "marginBottom": "4px"}),
                dcc.Graph(id="canvas", figure=engine_figure(engine),
                          config={"displayModeBar": False, "doubleClick": False}),
                html.Div(id="chat-log", style={
                    **PANEL_STYLE, "height": "200px", "overflowY": "auto",
                    "whiteSpace": "pre-wrap", "fontFamily": "monospace", "marginTop": "10px",
                }),
            ], style={"flexGrow": 1}),
        ], style={"display": "flex"}),

        dcc.Interval(id="anim-interval", interval=settings.ANIMATION_INTERVAL_MS,
                     n_intervals=0, disabled=True),
        dcc.Store(id="anim-token-store", data=0),
        dcc.Store(id="last-click-store", data=None),
        html.Div(id="export-status", style={"display": "none"}),
    ], style={"backgroundColor": "#000", "minHeight": "100vh", "padding": "16px"})


# ---------- APP ----------

def is_double_click(last_click, label, mode, now):
    # same node, both clicks made while idle
    return (
        label is not None and last_click is not None
        and mode == ModeKind.IDLE
        and last_click.get("mode") == ModeKind.IDLE.value
        and last_click.get("label") == label
        and now - last_click.get("t", 0) <= settings.DOUBLE_CLICK_MS
    )


def create_app(engine=None):
    engine = engine or NetworkEngine()

    app = DashProxy(__name__, transforms=[TriggerTransform()],
                    title="Network Topology Playground")
    app.layout = build_layout(engine)

    def _pointer(click_data, last_click):
        point = click_data["points"][0]
        x, y = point["x"], point["y"]
        now = time.time() * 1000
        hit = engine.model.find_node_near(x, y)

        mode = engine.controller.mode.kind
        if is_double_click(last_click, hit.label if hit else None, mode, now):
            engine.double_click(x, y)
            return None
        engine.click(x, y)
        return {"label": hit.label if hit else None, "t": now, "mode": mode.value}

    @app.callback(
        Output("canvas", "figure"),
        Output("chat-log", "children"),
        Output("sender-label", "children"),
        Output("receiver-label", "children"),
        Output("node-select", "options"),
        Output("mode-label", "children"),
        Output("anim-interval", "disabled"),
        Output("anim-token-store", "data"),
        Output("last-click-store", "data"),
        Output("chat-input", "value"),
        Input("canvas", "clickData"),
        Input("anim-interval", "n_intervals"),
        Trigger("add-edge-btn", "n_clicks"),
        Trigger("select-sender-btn", "n_clicks"),
        Trigger("select-receiver-btn", "n_clicks"),
        Trigger("clear-selection-btn", "n_clicks"),
        Trigger("delete-btn", "n_clicks"),
        Trigger("build-btn", "n_clicks"),
        Trigger("reset-btn", "n_clicks"),
        Trigger("run-algo-btn", "n_clicks"),
        Trigger("send-btn", "n_clicks"),
        Trigger("export-status", "children"),
        State("node-select", "value"),
        State("topology", "value"),
        State("algorithm", "value"),
        State("chat-input", "value"),
        State("anim-token-store", "data"),
        State("last-click-store", "data"),
        prevent_initial_call=True
    )
    def unified_callback(click_data, n_intervals, selected_node, topology, algorithm,
                         chat_text, anim_token, last_click):
        triggered = dash.callback_context.triggered
        if not triggered:
            raise dash.exceptions.PreventUpdate

        trigger = triggered[0]["prop_id"].split(".")[0]
        chat_value = dash.no_update
        token = anim_token

        if trigger == "canvas" and click_data:
            last_click = _pointer(click_data, last_click)
        elif trigger == "anim-interval":
            engine.tick(anim_token)
        elif trigger == "add-edge-btn":
            engine.arm_add_edge()
        elif trigger == "select-sender-btn":
            engine.arm_select_sender()
        elif trigger == "select-receiver-btn":
            engine.arm_select_receiver()
        elif trigger == "clear-selection-btn":
            engine.clear_selection()
        elif trigger == "delete-btn":
            engine.delete_node(selected_node)
        elif trigger == "build-btn":
            engine.build_topology(topology)
        elif trigger == "reset-btn":
            engine.reset()
        elif trigger == "run-algo-btn":
            token = engine.run_algorithm(algorithm) or token
        elif trigger == "send-btn":
            started = engine.send_message(chat_text)
            if started is not None:
                token, chat_value = started, ""

        snapshot = engine.snapshot()
        if snapshot.animating:
            token = snapshot.animation_token

        return (
            engine_figure(engine),
            [html.Div(line) for line in snapshot.log_lines],
            snapshot.sender or "—",
            snapshot.receiver or "—",
            [{"label": n.label, "value": n.label} for n in snapshot.nodes],
            MODE_TEXT[snapshot.mode.kind],
            not snapshot.animating,
            token,
            last_click,
            chat_value,
        )

    @app.callback(
        Output("report-download", "data"),
        Output("export-status", "children"),
        Trigger("download-btn", "n_clicks"),
        prevent_initial_call=True
    )
    def download_report():
        buffer = io.BytesIO()
        ok = engine.export_report(buffer, render_snapshot=True)
        status = f"export-{time.time()}"
        if not ok:
            return dash.no_update, status
        return dcc.send_bytes(buffer.getvalue(), settings.REPORT_FILENAME), status

    app.engine = engine
    return app


if __name__ == '__main__':
    configure_logging(settings.LOG_LEVEL)
    app = create_app()
    app.run(debug=settings.DEBUG, host=settings.HOST, port=settings.PORT)
