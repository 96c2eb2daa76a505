"""
The MODEL layer contains pure data structures and scene math.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the dataset, its I/O, the scene graph and the camera.
"""
