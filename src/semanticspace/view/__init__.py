"""
The VIEW layer: Qt windows and the PyVista renderers that draw the scene.
"""
