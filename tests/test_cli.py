from evalbench.cli import _local_tui_base_url, build_parser


def test_local_tui_base_url_maps_wildcard_host_to_loopback() -> None:
    assert _local_tui_base_url("0.0.0.0", 8797) == "http://127.0.0.1:8797"


def test_local_tui_base_url_keeps_specific_host() -> None:
    assert _local_tui_base_url("127.0.0.1", 9001) == "http://127.0.0.1:9001"


def test_parser_defaults_to_combined_mode_and_accepts_repl_evaluator() -> None:
    parser = build_parser()
    assert parser.parse_args([]).command is None
    args = parser.parse_args(["repl", "--evaluator", "pkg.mod:fn"])
    assert args.command == "repl"
    assert args.evaluator == "pkg.mod:fn"
