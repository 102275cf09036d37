"""
Parameters for the scipy solver collaborator
"""


class SolverParameters:
    """
    Configuration parameters for :class:`lpmodeler.solver.ScipySolver`.

    Attributes
    ----------
    time_limit : float or None
        Maximum time in seconds (default: None, unlimited)
    mip_rel_gap : float or None
        Relative MIP gap at which to stop (default: None, solver default)
    presolve : bool
        Run the HiGHS presolver (default: True)
    node_limit : int or None
        Maximum number of branch-and-bound nodes (default: None, unlimited)
    verbose : bool
        Print solver progress (default: False)

    Examples
    --------
    >>> params = SolverParameters()
    >>> params.time_limit = 60.0
    >>> params.mip_rel_gap = 1e-6
    """

    def __init__(self):
        self.time_limit = None
        self.mip_rel_gap = None
        self.presolve = True
        self.node_limit = None
        self.verbose = False

    def __repr__(self):
        return (f"SolverParameters(time_limit={self.time_limit}, "
                f"mip_rel_gap={self.mip_rel_gap}, "
                f"presolve={self.presolve}, "
                f"node_limit={self.node_limit})")

    def to_options(self):
        """Convert to the ``options`` dict of ``scipy.optimize.milp``"""
        options = {
            'disp': bool(self.verbose),
            'presolve': bool(self.presolve),
        }
        if self.time_limit is not None:
            options['time_limit'] = float(self.time_limit)
        if self.mip_rel_gap is not None:
            options['mip_rel_gap'] = float(self.mip_rel_gap)
        if self.node_limit is not None:
            options['node_limit'] = int(self.node_limit)
        return options

    @classmethod
    def from_dict(cls, d):
        """Create SolverParameters from dictionary"""
        params = cls()
        for key, value in d.items():
            if hasattr(params, key):
                setattr(params, key, value)
        return params

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'time_limit': self.time_limit,
            'mip_rel_gap': self.mip_rel_gap,
            'presolve': self.presolve,
            'node_limit': self.node_limit,
            'verbose': self.verbose,
        }
