from sklearn.utils import check_random_state

__all__ = ['Dataset', 'Bunch']


class Dataset(object):
    """Base class for synthetic datasets, generated in memory.

    Parameters
    ----------
    random_state : {int, None, np.random.RandomState}, default: None
        Seed the psuedorandom number generator used to generate the
        trajectory. If None, the global numpy PRNG is used.
    """

    def __init__(self, random_state=None):
        self.random_state = random_state

    @classmethod
    def description(cls):
        """Get a description from the Notes section of the docstring."""
        lines = [s.strip() for s in cls.__doc__.splitlines()]
        note_i = lines.index("Notes")
        return "\n".join(lines[note_i + 2:])

    def get(self):
        random = check_random_state(self.random_state)
        trajectory = self.simulate_func(random)
        return Bunch(trajectory=trajectory, DESCR=self.description())

    def simulate_func(self, random):
        # Implement in subclass
        raise NotImplementedError


class Bunch(dict):
    """Container object for datasets: dictionary-like object that
       exposes its keys as attributes."""

    def __init__(self, **kwargs):
        dict.__init__(self, kwargs)
        self.__dict__ = self
