"""Centralized LLM prompts for PharmaControl.

Available modules:
- product_scan: package photo extraction prompt and JSON schema
- regulatory: system prompt and greeting for the regulatory assistant
- financial_analysis: inventory profitability review prompt
"""
