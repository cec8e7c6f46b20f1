"""
Error classes for the debt consolidation projector.

Projection arithmetic never raises: numeric edge cases come back as
``Condition`` sentinels (see ``conditions``). Exceptions are reserved for
configuration that cannot be interpreted at all.
"""


class ConfigError(ValueError):
    """
    Configuration error while loading defaults or reporting horizons.

    **Common Causes:**
    - A horizon entry that is not a positive whole number of months
    - A YAML section that is not a mapping

    **Example Usage:**
        ```python
        from debt_consolidation.core.errors import ConfigError
        from debt_consolidation.core.horizons import normalize_horizons

        try:
            normalize_horizons([3, "soon"])
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass
