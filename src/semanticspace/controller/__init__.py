"""
The CONTROLLER layer owns the running scene: it builds the scene graph from
the dataset, moves the camera in response to input and drives each frame.
It talks to renderers only through the small protocol in scene_builder.
"""
