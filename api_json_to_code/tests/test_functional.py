"""
Functional tests driven by the JSON cases in test_data/functional.

Each case holds an API description, a configuration dictionary and the
patterns expected (or not expected) in the generated Java of one interface.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from api_json_to_code import errors
from api_json_to_code.pipeline import CodeGeneratorConfig, PipelineGenerator

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    test_cases = []
    for json_file in sorted((TEST_DATA_DIR / "functional").glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _generate_code(api, config_dict, interface_name):
    config = CodeGeneratorConfig.from_dict(config_dict)
    config.add_generation_comment = False
    return PipelineGenerator(api, config).generate_interface(interface_name)


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda case: case["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    api = test_case["api"]
    config = test_case.get("config", {})
    interface_name = test_case.get("interface", next(iter(api)))

    if "expected_error" in test_case:
        error_class = getattr(errors, test_case["expected_error"])
        with pytest.raises(error_class):
            _generate_code(api, config, interface_name)
        return

    generated_code = _generate_code(api, config, interface_name)
    for expected in test_case.get("expected_java", []):
        assert expected in generated_code, f"Expected pattern '{expected}' not found in output of {test_case['name']}"
    for unexpected in test_case.get("unexpected_java", []):
        assert unexpected not in generated_code, f"Unexpected pattern '{unexpected}' found in output of {test_case['name']}"


if __name__ == "__main__":
    pytest.main([__file__])
