"""Keyword registry: confidentiality and business-sensitivity phrases.

Keyword hits are document-level signals: they never claim text spans and
may overlap structured findings.  Matching is case-insensitive on whole
phrases ("pii" does not fire inside "spiimage").
"""

from __future__ import annotations

from .types import KeywordRule, Severity

HIGH, MEDIUM = Severity.HIGH, Severity.MEDIUM


def _kw(keyword: str, severity: Severity, suggestion: str) -> KeywordRule:
    return KeywordRule(keyword=keyword, severity=severity, suggestion=suggestion)


_BANK_NAME = "Bank name with account details detected - financial data leak risk"
_SOURCE_CODE = "Source code detected - intellectual property risk"
_UNRELEASED = "Unreleased financial data detected - financial leak risk"

KEYWORD_RULES: tuple[KeywordRule, ...] = (
    # Confidentiality markers
    _kw("confidential", HIGH, "Confidential information detected - data leak risk"),
    _kw("internal use only", HIGH, "Internal-only information detected - data leak risk"),
    _kw("proprietary", HIGH, "Proprietary information detected - trade secret leak risk"),
    _kw("classified", HIGH, "Classified information detected - security breach risk"),
    _kw("secret", HIGH, "Secret information detected - data leak risk"),
    _kw("nda", HIGH, "NDA-related content detected - legal violation risk"),
    _kw("non-disclosure", HIGH, "Non-disclosure content detected - legal violation risk"),
    _kw("trade secret", HIGH, "Trade secret detected - intellectual property leak risk"),
    _kw("customer data", HIGH, "Customer data detected - GDPR/privacy violation risk"),
    _kw("personal information", HIGH, "Personal information detected - privacy violation risk"),
    _kw("pii", HIGH, "PII (personally identifiable information) detected - privacy violation risk"),
    _kw("phi", HIGH, "PHI (protected health information) detected - HIPAA violation risk"),
    _kw("source code", MEDIUM, _SOURCE_CODE),
    _kw("sourcecode", MEDIUM, _SOURCE_CODE),
    _kw("algorithm", MEDIUM, "Algorithm details detected - intellectual property risk"),
    _kw("business plan", HIGH, "Business plan detected - competitive intelligence leak risk"),
    _kw("financial statement", HIGH, "Financial statement detected - financial data leak risk"),
    _kw("revenue", MEDIUM, "Financial data detected - consider removing specific numbers"),
    _kw("salary", MEDIUM, "Salary information detected - privacy risk"),
    _kw("employee id", MEDIUM, "Employee ID detected - privacy risk"),
    _kw("social security", HIGH, "Social Security number context detected - identity theft risk"),

    # India-specific identifiers and institutions
    _kw("aadhaar", HIGH, "Aadhaar number context detected - critical identity theft risk (India)"),
    _kw("pan card", HIGH, "PAN card context detected - tax identity theft risk (India)"),
    _kw("voter id", HIGH, "Voter ID context detected - identity theft risk (India)"),
    _kw("ifsc", HIGH, "IFSC code context detected - bank account exposure risk (India)"),
    _kw("upi", HIGH, "UPI ID context detected - financial fraud risk (India)"),
    _kw("gstin", HIGH, "GSTIN context detected - business tax identity exposure (India)"),
    _kw("gst number", HIGH, "GST number context detected - business tax identity exposure (India)"),
    _kw("icici bank", MEDIUM, _BANK_NAME),
    _kw("sbi", MEDIUM, _BANK_NAME),
    _kw("hdfc", MEDIUM, _BANK_NAME),
    _kw("axis bank", MEDIUM, _BANK_NAME),
    _kw("npci", HIGH, "NPCI context detected - financial infrastructure leak risk (India)"),
    _kw("rbi", HIGH, "RBI context detected - regulatory/financial leak risk (India)"),
    _kw("ondc", HIGH, "Government/ONDC project context detected - confidential project leak risk (India)"),
    _kw("smart city", HIGH, "Smart City project context detected - government contract leak risk (India)"),

    # Company, partner and project names
    _kw("reliance retail", HIGH, "Company-specific confidential information detected - competitive intelligence leak risk"),
    _kw("jiomart", HIGH, "Internal expansion strategy detected - competitive intelligence leak risk"),
    _kw("flipkart", HIGH, "Competitive strategy context detected - business intelligence leak risk"),
    _kw("delhivery", MEDIUM, "Partner/vendor information detected - business relationship leak risk"),
    _kw("maharashtra", MEDIUM, "Regional business data detected - geographic business intelligence leak risk"),
    _kw("project horizon", HIGH, "Internal project name detected - confidential project leak risk"),

    # Financial reporting and strategy
    _kw("q3 revenue", HIGH, _UNRELEASED),
    _kw("quarterly revenue", HIGH, _UNRELEASED),
    _kw("supplier churn", HIGH, "Supplier/vendor data detected - business relationship leak risk"),
    _kw("proprietary algorithm", HIGH, "Proprietary algorithm detected - intellectual property leak risk"),
    _kw("proprietary logistics", HIGH, "Proprietary logistics system detected - trade secret leak risk"),
    _kw("board memo", HIGH, "Board memo context detected - executive/strategic leak risk"),
    _kw("internal memo", HIGH, "Internal memo context detected - confidential communication leak risk"),

    # Medical
    _kw("ayushman bharat", HIGH, "Ayushman Bharat/medical claim context detected - medical data leak risk (India)"),
    _kw("hospital discharge", HIGH, "Hospital discharge summary detected - medical record leak risk (India)"),
)


def scan_keywords(text: str, rules: tuple[KeywordRule, ...] = KEYWORD_RULES):
    """Yield ``(rule, match)`` for the first occurrence of each keyword."""
    for rule in rules:
        m = rule.pattern.search(text)
        if m is not None:
            yield rule, m
