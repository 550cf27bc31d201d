"""
Main Window Module
Main application window that hosts the arcball GL widget.
"""

from PyQt5.QtWidgets import QMainWindow

from gl_widget import GLWidget


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, mesh, config=None):
        super().__init__()
        self.setWindowTitle(f"Arcball \u2014 {mesh.name}")
        self.resize(800, 600)

        self.gl_widget = GLWidget(mesh, config=config)
        self.setCentralWidget(self.gl_widget)

        self.print_controls()

    def print_controls(self):
        """Print control information to console."""
        print("\n" + "="*60)
        print("CONTROLS:")
        print("="*60)
        print("Mouse:")
        print("  Left Click + Drag  : Rotate about the pivot")
        print("  Right Click + Drag : Pan camera")
        print("  Mouse Wheel        : Zoom in/out")
        print("\nKeyboard:")
        print("  R                  : Reset camera")
        print("="*60 + "\n")

    def closeEvent(self, event):
        self.gl_widget.cleanup()
        super().closeEvent(event)
