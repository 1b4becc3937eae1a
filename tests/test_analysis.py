"""Unit tests for the AI-backed features with the LLM layer mocked out."""

import json
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from src.analysis.financial_health import FAILURE_MESSAGE, MAX_PRODUCTS, analyze_financial_health
from src.analysis.product_scan import ScanResult, analyze_product_image
from src.analysis.regulatory_assistant import NO_ANSWER, ask_regulatory_assistant
from src.config.settings import PharmaSettings


def _settings(**keys):
    values = dict(gemini_api_keys=[], openrouter_api_keys=[], groq_api_keys=[])
    values.update(keys)
    return PharmaSettings(**values)


class TestProductScan:
    def test_successful_scan(self):
        gemini = MagicMock()
        gemini.extract_json.return_value = {
            "productName": "Amoxicilina 500mg",
            "activeIngredient": "Amoxicilina",
            "expiryDate": "2027-03-01",
            "lotNumber": "A123",
            "registrationNumber": "INVIMA-2019M-0042",
        }
        with patch("src.analysis.product_scan.get_gemini_client", return_value=gemini):
            scan = analyze_product_image(b"jpeg-bytes", "image/png")

        assert scan.product_name == "Amoxicilina 500mg"
        assert gemini.extract_json.call_args.kwargs["mime_type"] == "image/png"
        assert scan.to_product_fields() == {
            "name": "Amoxicilina 500mg",
            "invima_registration": "INVIMA-2019M-0042",
            "lot_number": "A123",
            "expiry_date": date(2027, 3, 1),
        }

    def test_api_failure_returns_none(self):
        gemini = MagicMock()
        gemini.extract_json.side_effect = Exception("Gemini API error: 500")
        with patch("src.analysis.product_scan.get_gemini_client", return_value=gemini):
            assert analyze_product_image(b"jpeg-bytes") is None

    def test_missing_key_returns_none(self):
        with patch("src.analysis.product_scan.get_gemini_client", side_effect=ValueError("no key")):
            assert analyze_product_image(b"jpeg-bytes") is None

    def test_empty_image(self):
        assert analyze_product_image(b"") is None

    def test_nulls_and_bad_dates(self):
        scan = ScanResult.from_payload(
            {"productName": "  ", "expiryDate": "03/2027", "lotNumber": None}
        )
        assert scan.product_name is None
        assert scan.to_product_fields() == {
            "name": "",
            "invima_registration": "",
            "lot_number": "",
            "expiry_date": None,
        }


class TestRegulatoryAssistant:
    def test_grounded_answer_with_sources(self):
        gemini = MagicMock()
        gemini.grounded_answer.return_value = ("El margen máximo es 25%.", [("INVIMA", "https://invima.gov.co")])
        with patch("src.analysis.regulatory_assistant.SETTINGS", _settings(gemini_api_keys=["g"])), patch(
            "src.analysis.regulatory_assistant.get_gemini_client", return_value=gemini
        ):
            reply = ask_regulatory_assistant("¿Margen del Fondo Nacional?")

        assert reply.text == "El margen máximo es 25%."
        assert reply.sources == [("INVIMA", "https://invima.gov.co")]
        assert "INVIMA" in gemini.grounded_answer.call_args.kwargs["system_instruction"]

    def test_empty_reply_uses_fallback_text(self):
        gemini = MagicMock()
        gemini.grounded_answer.return_value = ("", [])
        with patch("src.analysis.regulatory_assistant.SETTINGS", _settings(gemini_api_keys=["g"])), patch(
            "src.analysis.regulatory_assistant.get_gemini_client", return_value=gemini
        ):
            assert ask_regulatory_assistant("?").text == NO_ANSWER

    def test_without_gemini_uses_fallback_client(self):
        smart = MagicMock()
        smart.chat.return_value = "Según la Resolución..."
        with patch("src.analysis.regulatory_assistant.SETTINGS", _settings(groq_api_keys=["q"])), patch(
            "src.analysis.regulatory_assistant.get_smart_client", return_value=smart
        ):
            reply = ask_regulatory_assistant("pregunta")

        assert reply.text == "Según la Resolución..."
        assert reply.sources == []
        messages = smart.chat.call_args.args[0]
        assert messages[0]["role"] == "system"
        assert messages[1] == {"role": "user", "content": "pregunta"}

    def test_errors_propagate(self):
        gemini = MagicMock()
        gemini.grounded_answer.side_effect = Exception("Gemini API error: 503")
        with patch("src.analysis.regulatory_assistant.SETTINGS", _settings(gemini_api_keys=["g"])), patch(
            "src.analysis.regulatory_assistant.get_gemini_client", return_value=gemini
        ):
            with pytest.raises(Exception, match="503"):
                ask_regulatory_assistant("pregunta")


class TestFinancialHealth:
    def test_sends_at_most_twenty_products(self, make_product):
        products = [make_product(id=str(i), name=f"Producto {i}") for i in range(25)]
        smart = MagicMock()
        smart.chat.return_value = "Estrategia"
        with patch("src.analysis.financial_health.get_smart_client", return_value=smart):
            assert analyze_financial_health(products) == "Estrategia"

        prompt = smart.chat.call_args.args[0][0]["content"]
        payload = json.loads(prompt.split("Datos: ", 1)[1])
        assert len(payload) == MAX_PRODUCTS
        assert payload[0]["marginPercent"] == 20.0
        assert payload[0]["marginCompliant"] is True
        assert "gemini" in smart.chat.call_args.kwargs["provider_models"]

    def test_failure_returns_apology(self, seeded_products):
        smart = MagicMock()
        smart.chat.side_effect = RuntimeError("No LLM API keys configured.")
        with patch("src.analysis.financial_health.get_smart_client", return_value=smart):
            assert analyze_financial_health(seeded_products) == FAILURE_MESSAGE

    def test_payload_carries_days_of_inventory(self, seeded_products):
        smart = MagicMock()
        smart.chat.return_value = "Estrategia"
        with patch("src.analysis.financial_health.get_smart_client", return_value=smart):
            analyze_financial_health(seeded_products)

        prompt = smart.chat.call_args.args[0][0]["content"]
        payload = json.loads(prompt.split("Datos: ", 1)[1])
        # Fenobarbital: 30 sold over an average of 135 units
        assert payload[1]["daysInventory"] == 135.0
