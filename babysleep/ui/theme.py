"""Colors and stylesheet for the main window."""

COLORS = {
    "bg": "#3232C8",
    "panel_bg": "#000000",
    "clock_text": "#FFFFFF",
    "started_text": "#FFFFFF",
    "elapsed_text": "#FF0000",
    "last_text": "#C8C8FF",
    "start_bg": "#00FF00",
    "start_text": "#FF0000",
    "resume_bg": "#FFB000",
    "resume_text": "#000000",
    "stop_bg": "#FF0000",
    "stop_text": "#FFFFFF",
}


def build_stylesheet(colors=COLORS):
    c = colors
    return (
        f"QMainWindow, QWidget#central {{ background-color: {c['bg']}; }}"
        f"QLabel {{ background-color: {c['panel_bg']}; padding: 4px; }}"
        f"QLabel#last {{ background: transparent; color: {c['last_text']}; }}"
        f"QPushButton#start {{ background-color: {c['start_bg']}; color: {c['start_text']};"
        "  border: none; padding: 12px 24px; }"
        f"QPushButton#resume {{ background-color: {c['resume_bg']}; color: {c['resume_text']};"
        "  border: none; padding: 12px 24px; }"
        f"QPushButton#stop {{ background-color: {c['stop_bg']}; color: {c['stop_text']};"
        "  border: none; padding: 12px 24px; }"
    )
