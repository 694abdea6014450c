"""scratchmsm: Markov state models of discrete trajectories with dense
linear algebra."""
from .version import version as __version__
