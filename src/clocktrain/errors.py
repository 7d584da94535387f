"""Exceptions raised by the clock train generator."""


class ClockTrainError(Exception):
    """Base class for all clocktrain errors."""


class TrainConfigurationError(ClockTrainError, ValueError):
    """Tooth counts, module and span cannot be laid out as a meshing train."""


class InvalidSelectionError(ClockTrainError, ValueError):
    """Unknown root profile or pinion family name."""


class DecorationError(ClockTrainError, ValueError):
    """Spoke or hole dimensions do not fit inside the wheel."""
