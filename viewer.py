#!/usr/bin/env python3
"""
Arcball Viewer - Main Entry Point
Wireframe demo of the arcball camera: drag to rotate, right-drag to pan,
wheel to zoom.
"""

import sys
from PyQt5.QtWidgets import QApplication

from demo_mesh import MESHES
from main_window import MainWindow


def usage():
    print("\nUsage: python viewer.py [mesh]")
    print("\nDemo meshes:")
    for name in MESHES:
        print(f"  {name}")
    print()


def main():
    """Main entry point."""
    print("\n" + "="*60)
    print("ARCBALL VIEWER")
    print("Arcball camera demo")
    print("="*60)

    name = sys.argv[1] if len(sys.argv) >= 2 else 'torus'
    if name not in MESHES:
        print(f"✗ Unknown mesh: {name}")
        usage()
        sys.exit(1)

    mesh = MESHES[name]()
    center, radius = mesh.bounding_sphere()
    print(f"✓ {mesh.name}: {mesh.triangle_count} triangles, "
          f"pivot {tuple(round(float(c), 3) for c in center)}, radius {radius:.3f}")

    app = QApplication(sys.argv)
    window = MainWindow(mesh)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
