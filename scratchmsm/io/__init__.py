from .io import load_trajectory
