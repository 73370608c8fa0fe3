"""Shared fixtures for report splitter tests."""

import base64
import itertools

import pytest

from report_splitter.config.config_manager import get_config_manager
from report_splitter.filters.report_filter import ReportFilter
from report_splitter.models import AnomalyPolicy


COVERAGE_XML = (
    '<coverage line-rate="0.9" branch-rate="0.8" lines-covered="10" lines-valid="12" '
    'branches-covered="4" branches-valid="6" complexity="1.2" version="1" timestamp="100">'
    '<packages><package name="p1" line-rate="1.0" branch-rate="1.0"><classes>'
    '<class name="C" filename="C.java" line-rate="1.0" branch-rate="1.0">'
    '<methods><method name="m" signature="()V"/></methods>'
    '</class></classes></package></packages></coverage>'
)

JUNIT_XML = '<testsuite name="S" tests="1" failures="0"><testcase name="t1" classname="K"/></testsuite>'


def encode(xml: str) -> str:
    return base64.b64encode(xml.encode('utf-8')).decode('ascii')


@pytest.fixture
def encode_report():
    """Fixture providing the base64 encoder used to build input records."""
    return encode


@pytest.fixture
def sequential_ids():
    """Deterministic identifier factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def cobertura_contract():
    return get_config_manager().load_mapping_contract('cobertura')


@pytest.fixture
def junit_contract():
    return get_config_manager().load_mapping_contract('junit')


@pytest.fixture
def cobertura_filter(cobertura_contract, sequential_ids):
    return ReportFilter('message', cobertura_contract, id_factory=sequential_ids)


@pytest.fixture
def skipping_cobertura_filter(cobertura_contract, sequential_ids):
    return ReportFilter('message', cobertura_contract, AnomalyPolicy.SKIP_BRANCH, id_factory=sequential_ids)


@pytest.fixture
def junit_filter(junit_contract, sequential_ids):
    return ReportFilter('message', junit_contract, id_factory=sequential_ids)


@pytest.fixture
def coverage_xml():
    return COVERAGE_XML


@pytest.fixture
def junit_xml():
    return JUNIT_XML
