"""
Tests for the command-line entry point.
"""
import json
from unittest.mock import AsyncMock, patch

from src import cli
from src.core.errors import NotFoundError
from src.models.conversion import ConversionType
from src.models.slide import QualityTier

SOURCE_URL = "https://www.slideshare.net/slideshow/my-deck/123456"


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = cli.build_parser().parse_args([SOURCE_URL])

        assert args.url == SOURCE_URL
        assert args.conversion_type == "pdf"
        assert args.quality == "hd"
        assert args.output_dir is None

    def test_options(self, tmp_path):
        args = cli.build_parser().parse_args(
            [SOURCE_URL, "--type", "images_zip", "-q", "sd", "-o", str(tmp_path)]
        )

        assert args.conversion_type == "images_zip"
        assert args.quality == "sd"
        assert args.output_dir == tmp_path


class TestMain:
    """Tests for main()."""

    def test_success_prints_response(self, capsys):
        body = json.dumps({"success": True})
        with patch.object(cli, "run", new=AsyncMock(return_value=body)) as run:
            assert cli.main([SOURCE_URL, "--type", "pptx", "--quality", "sd"]) == 0

        run.assert_awaited_once_with(
            SOURCE_URL, ConversionType.PPTX, QualityTier.SD, output_dir=None
        )
        assert json.loads(capsys.readouterr().out) == {"success": True}

    def test_pipeline_error_exit_code(self, capsys):
        with patch.object(cli, "run", new=AsyncMock(side_effect=NotFoundError("No slide images found"))):
            assert cli.main([SOURCE_URL]) == 1

        assert "Error (404): No slide images found" in capsys.readouterr().err
