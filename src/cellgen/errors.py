"""Exception types for the cellular automaton generator."""


class ConfigurationError(ValueError):
    """Raised when a run is configured with values the automaton cannot use.

    Always raised before the first generation is computed, so a run that
    fails this way never produces an artifact.
    """
