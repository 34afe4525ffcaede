"""State/store layer.

This package is the single owner of the state published to observers:
the latest poll result, the version check outcome, the error state and
the loading flag.
"""
