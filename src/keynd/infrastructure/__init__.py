"""
Infrastructure layer: NumPy-backed codecs, the concrete NDArray, linear
algebra, random sampling and runtime configuration.
"""
