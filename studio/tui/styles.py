"""
Centralized Textual CSS for the terminal UI.
"""

BLACK = "#1a1b1a"
DARK_GRAY = "#282828"
CHARCOAL_GRAY = "#32302f"
ORANGE = "#d65d0e"
TEAL_GREEN = "#689d6a"
CORAL_PINK = "#ea6962"
OFF_WHITE = "#ebdbb2"


APP_CSS = """
Screen {
    background: %(BLACK)s;
    color: %(OFF_WHITE)s;
}
#root {
    height: 1fr;
    layout: vertical;
    background: %(DARK_GRAY)s;
}
#actions {
    height: auto;
    border: heavy %(ORANGE)s;
    margin: 1 1 0 1;
    padding: 1;
    background: %(CHARCOAL_GRAY)s;
}
#panes {
    height: 1fr;
    margin: 0 1 1 1;
}
#queue-pane, #side-pane {
    border: solid %(ORANGE)s;
    background: %(CHARCOAL_GRAY)s;
    padding: 1;
}
#queue-pane {
    width: 1fr;
    margin-right: 1;
}
#side-pane {
    width: 44;
}
#jobs-table {
    height: 1fr;
    margin-top: 1;
}
#estimate-time, #estimate-cost, #player-text {
    color: %(TEAL_GREEN)s;
}
#log-view {
    height: 1fr;
}
.label {
    color: %(ORANGE)s;
    text-style: bold;
    margin-top: 1;
}
Button {
    background: %(BLACK)s;
    color: %(OFF_WHITE)s;
    border: solid %(ORANGE)s;
    margin-right: 1;
}
Button.-primary {
    color: %(BLACK)s;
    background: %(ORANGE)s;
}
Button#cancel, Button#clear {
    border: solid %(CORAL_PINK)s;
    color: %(CORAL_PINK)s;
}
""" % {
    "BLACK": BLACK,
    "DARK_GRAY": DARK_GRAY,
    "CHARCOAL_GRAY": CHARCOAL_GRAY,
    "ORANGE": ORANGE,
    "TEAL_GREEN": TEAL_GREEN,
    "CORAL_PINK": CORAL_PINK,
    "OFF_WHITE": OFF_WHITE,
}
