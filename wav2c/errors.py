"""Exceptions raised while converting a WAV file to a C array"""


class Wav2CError(ValueError):
    """Base class for every conversion failure"""


class InvalidContainer(Wav2CError):
    """Input is not a RIFF/WAVE file"""


class UnsupportedFormat(Wav2CError):
    """Not integer PCM, or a bit depth other than 8, 16 or 32"""


class TruncatedFile(Wav2CError):
    """A required chunk is missing or runs past the end of the file"""


class MisalignedSampleData(Wav2CError):
    """The data chunk does not hold a whole number of sample frames"""


class SampleLimitExceeded(Wav2CError):
    pass


class EmptySampleSet(Wav2CError):
    pass


class OutputExists(Wav2CError):
    def __init__(self, path):
        super().__init__(f"Output file already exists: {path}")
        self.path = path


class OutputConflict(Wav2CError):
    """Two outputs resolve to the same file, or a target is not a file"""
