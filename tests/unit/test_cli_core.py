from solar_insights.cli import parse_args, render_state
from solar_insights.common.constants import DEFAULT_ADDRESS
from solar_insights.pipeline.insights import placeholder_insights
from solar_insights.pipeline.state import PipelineState


def test_parse_args_defaults():
    args = parse_args([])
    assert args.command == "analyze"
    assert args.address == DEFAULT_ADDRESS
    assert args.mode is None
    assert args.overlay_config_dir is None
    assert args.skip_credential_check is False
    assert args.json is False


def test_parse_args_interactive_with_overrides():
    args = parse_args(["interactive", "--mode", "mock", "--skip-credential-check", "--json"])
    assert args.command == "interactive"
    assert args.mode == "mock"
    assert args.skip_credential_check is True
    assert args.json is True


def test_render_state_shows_error_banner_only():
    assert render_state(PipelineState(error="Please enter a valid address")) == "[Error] Please enter a valid address"


def test_render_state_shows_results_panel():
    state = PipelineState(map_url="https://maps.test/x", solar_data=placeholder_insights("1 Main St"))
    text = render_state(state)

    assert "Property Satellite View: https://maps.test/x" in text
    assert "Yearly Generation: 12000 kWh" in text
    assert "20-Year Savings: $25000" in text
    assert "Annual Sunshine: 2800 hours" in text
    assert "Roof Space Available: 85 m²" in text
    assert "Recommended Panels: 24" in text
