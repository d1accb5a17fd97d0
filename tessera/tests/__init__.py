"""
***************************************************************************
Unit testing (:mod:`~tessera.tests`)
***************************************************************************

Unit testing with `pytest`.  Statistical tests over many seeded trials
are marked slow and run only with the ``--runslow`` option.

"""


class NamedFunction:
    """Function with a readable name for parametrised test identifiers.

    Parameters
    ----------
    name: Name of the function.
    func: Function.

    Attributes
    ----------
    name: Name of the function.
    func: Function.

    """
    name: str
    func: callable

    def __init__(self, name: str, func: callable):
        self.name = name
        self.func = func

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.name

    def __call__(self, *args, **kwargs):
        return self.func(*args, **kwargs)
