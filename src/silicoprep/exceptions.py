"""Error types raised by silicoprep."""


class ConfigurationError(ValueError):
    """A parameter is outside its valid domain."""


class InvalidRateConfiguration(ConfigurationError):
    """Mutation rates are not probabilities, or they sum to more than 1."""


class InvalidDepthConfiguration(ConfigurationError):
    """Depth mean or window length cannot drive the fragment sampler."""


class SequenceIOError(OSError):
    """An input or output sequence file cannot be used."""


class MalformedRecordError(SequenceIOError):
    """The input stream is not valid FASTA."""
