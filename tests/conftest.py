import logging

import pytest

from wav2c.gen_wav import build_wav, generate_fixtures, pack_samples


@pytest.fixture(autouse=True)
def restore_logging():
    # cli.main reconfigures the root logger
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(scope="session")
def fixture_dir(tmp_path_factory):
    path = tmp_path_factory.mktemp("fixtures")
    generate_fixtures(path)
    return path


@pytest.fixture
def make_wav(tmp_path):
    """Write a PCM WAV holding `values` and return its path"""
    def _make(values, name="input.wav", channels=1, bits_per_sample=16, sample_rate=44100, **kwargs):
        data = pack_samples(values, bits_per_sample)
        path = tmp_path / name
        path.write_bytes(build_wav(data, channels, bits_per_sample, sample_rate, **kwargs))
        return path
    return _make
