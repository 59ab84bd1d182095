"""Tests for API schema models."""

from sugar_audit import models
from sugar_audit.services import analyzer, claims, verdict


class TestSharedEnums:
    """Test response models reuse the pipeline's verdict enums."""

    def test_same_enum_classes(self):
        """Test there is one definition of each verdict enum."""
        assert models.SugarVerdict is verdict.SugarVerdict
        assert models.ClaimVerdict is claims.ClaimVerdict
        assert models.Confidence is analyzer.Confidence

    def test_result_model_accepts_service_value(self):
        """Test a service verdict validates into the response model unchanged."""
        result = models.ClaimResultModel(
            claim="High protein",
            verdict=claims.ClaimVerdict.AMBER,
            reason="Cannot verify",
        )
        assert result.verdict is claims.ClaimVerdict.AMBER
