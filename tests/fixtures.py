import pytest

from ssem.runtime.cpu import CPU

import unit_utils


@pytest.fixture
def with_countdown():
    yield CPU(unit_utils.load_testdata('countdown'))


@pytest.fixture
def with_trace():
    trace = []

    def observer(proc: CPU, inst):
        trace.append((proc.ci, str(inst)))

    yield trace, observer
