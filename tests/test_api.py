"""
Unit tests for API endpoints.
"""
import pytest
from unittest.mock import AsyncMock, Mock, patch
from fastapi.testclient import TestClient

from src.api.routes.convert import convert_slides
from src.core.errors import InputError, NotFoundError, PublishError, UpstreamError
from src.main import create_app
from src.models.conversion import ConversionType, ConvertData, ConvertResponse
from src.models.slide import QualityTier

SOURCE_URL = "https://www.slideshare.net/slideshow/my-deck/123456"


@pytest.fixture
def app(clean_environment):
    """Create the application with its error handlers."""
    return create_app()


@pytest.fixture
def client(app):
    """Create a test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_pipeline():
    """Replace the pipeline the route uses."""
    pipeline = Mock()
    pipeline.convert = AsyncMock()
    with patch("src.api.routes.convert.get_conversion_pipeline", return_value=pipeline):
        yield pipeline


def pdf_response() -> ConvertResponse:
    return ConvertResponse(
        message="PDF generated successfully.",
        data=ConvertData(
            thumbnail="https://image.slidesharecdn.com/my-deck/1-2048.jpg",
            quality=QualityTier.HD,
            conversion_type=ConversionType.PDF,
            slides_download_link="https://files.example.com/SS_DL/17102026/my-deck.pdf",
            file_name="my-deck.pdf",
            size=102400,
            title="My Deck",
        ),
    )


class TestConvertAPI:
    """Tests for GET /convert."""

    def test_convert_success(self, client, mock_pipeline):
        """Test a successful conversion payload."""
        mock_pipeline.convert.return_value = pdf_response()

        response = client.get("/convert", params={"url": SOURCE_URL, "conversion_type": "pdf", "quality": "hd"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "PDF generated successfully."
        assert body["data"] == {
            "thumbnail": "https://image.slidesharecdn.com/my-deck/1-2048.jpg",
            "quality": "HD",
            "conversion_type": "PDF",
            "slides_download_link": "https://files.example.com/SS_DL/17102026/my-deck.pdf",
            "file_name": "my-deck.pdf",
            "size": 102400,
            "title": "My Deck",
        }
        mock_pipeline.convert.assert_awaited_once_with(SOURCE_URL, ConversionType.PDF, QualityTier.HD)

    def test_quality_defaults_to_hd(self, client, mock_pipeline):
        mock_pipeline.convert.return_value = pdf_response()

        response = client.get("/convert", params={"url": SOURCE_URL, "conversion_type": "PPTX"})

        assert response.status_code == 200
        mock_pipeline.convert.assert_awaited_once_with(SOURCE_URL, ConversionType.PPTX, QualityTier.HD)

    def test_case_insensitive_parameters(self, client, mock_pipeline):
        mock_pipeline.convert.return_value = pdf_response()

        client.get("/convert", params={"url": SOURCE_URL, "conversion_type": "Images_Zip", "quality": "SD"})

        mock_pipeline.convert.assert_awaited_once_with(SOURCE_URL, ConversionType.IMAGES_ZIP, QualityTier.SD)

    def test_missing_url(self, client, mock_pipeline):
        response = client.get("/convert", params={"conversion_type": "pdf"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": True, "detail": "Invalid query parameters"}
        mock_pipeline.convert.assert_not_called()

    def test_unsupported_conversion_type(self, client, mock_pipeline):
        response = client.get("/convert", params={"url": SOURCE_URL, "conversion_type": "docx"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported conversion type"
        mock_pipeline.convert.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("conversion_type,quality", [("docx", "hd"), ("pdf", "4k")])
    async def test_parameter_errors_hide_parse_failure(self, conversion_type, quality):
        """Rejected parameters surface as a single InputError without a chained ValueError."""
        with pytest.raises(InputError) as exc:
            await convert_slides(url=SOURCE_URL, conversion_type=conversion_type, quality=quality)

        assert exc.value.__cause__ is None
        assert exc.value.__suppress_context__ is True

    def test_invalid_quality(self, client, mock_pipeline):
        response = client.get("/convert", params={"url": SOURCE_URL, "conversion_type": "pdf", "quality": "4k"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid query parameters"

    @pytest.mark.parametrize("error,status", [
        (NotFoundError("No slide images found"), 404),
        (UpstreamError("Failed to fetch images: error fetching image x: status 404"), 500),
        (PublishError("FTP upload failed: 530 Login incorrect"), 500),
    ])
    def test_pipeline_errors(self, client, mock_pipeline, error, status):
        mock_pipeline.convert.side_effect = error

        response = client.get("/convert", params={"url": SOURCE_URL, "conversion_type": "pdf"})

        assert response.status_code == status
        assert response.json() == {"success": False, "error": True, "detail": error.detail}

    def test_unexpected_error(self, client, mock_pipeline):
        mock_pipeline.convert.side_effect = RuntimeError("boom")

        response = client.get("/convert", params={"url": SOURCE_URL, "conversion_type": "pdf"})

        assert response.status_code == 500
        assert response.json()["success"] is False


class TestServiceEndpoints:
    """Tests for the root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "API entry"}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "remote_store_configured" in data
