"""Static eVatR data: endpoint paths, VAT-ID patterns, member states, status table.

Pure data, no I/O. The status table below is the complete fallback used
whenever no on-disk snapshot is loaded.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Endpoints (relative to the versioned base URL)
# ---------------------------------------------------------------------------

ENDPOINT_VALIDATION = "/abfrage"
ENDPOINT_STATUS_MESSAGES = "/info/statusmeldungen"
ENDPOINT_EU_MEMBER_STATES = "/info/eu_mitgliedstaaten"
API_DOCS_PATH = "/api-docs"

STATUS_FILE_NAME = "statusmeldungen.json"

# ---------------------------------------------------------------------------
# VAT-ID syntax rules, one per supported country
# ---------------------------------------------------------------------------

VATID_PATTERNS: dict[str, re.Pattern[str]] = {
    "AT": re.compile(r"^ATU\d{8}$"),  # ATU + 8 digits
    "BE": re.compile(r"^BE[01]\d{9}$"),  # BE + 0 or 1 + 9 digits
    "BG": re.compile(r"^BG\d{9,10}$"),
    "CY": re.compile(r"^CY\d{8}[A-Z]$"),  # 8 digits + letter
    "CZ": re.compile(r"^CZ\d{8,10}$"),
    "DE": re.compile(r"^DE\d{9}$"),
    "DK": re.compile(r"^DK\d{8}$"),
    "EE": re.compile(r"^EE\d{9}$"),
    "ES": re.compile(r"^ES[A-Z]\d{7}[A-Z0-9]$"),  # letter + 7 digits + letter or digit
    "FI": re.compile(r"^FI\d{8}$"),
    "FR": re.compile(r"^FR[A-Z0-9]{2}\d{9}$"),  # 2 chars + 9 digits
    "GR": re.compile(r"^GR\d{9}$"),
    "HR": re.compile(r"^HR\d{11}$"),
    "HU": re.compile(r"^HU\d{8}$"),
    "IE": re.compile(r"^IE\d[A-Z0-9]\d{5}[A-Z]$|^\d{7}[A-Z]{1,2}$"),  # old and new formats
    "IT": re.compile(r"^IT\d{11}$"),
    "LT": re.compile(r"^LT\d{9}$|^\d{12}$"),  # 9 or 12 digits
    "LU": re.compile(r"^LU\d{8}$"),
    "LV": re.compile(r"^LV\d{11}$"),
    "MT": re.compile(r"^MT\d{8}$"),
    "NL": re.compile(r"^NL\d{9}B\d{2}$"),  # 9 digits + B + 2 digits
    "PL": re.compile(r"^PL\d{10}$"),
    "PT": re.compile(r"^PT\d{9}$"),
    "RO": re.compile(r"^RO\d{2,10}$"),
    "SE": re.compile(r"^SE\d{10}01$"),  # 10 digits + 01
    "SI": re.compile(r"^SI\d{8}$"),
    "SK": re.compile(r"^SK\d{10}$"),
    "XI": re.compile(r"^XI\d{9}$|^\d{12}$"),  # Northern Ireland
}

EU_MEMBER_STATES: dict[str, str] = {
    "AT": "Austria",
    "BE": "Belgium",
    "BG": "Bulgaria",
    "CY": "Cyprus",
    "CZ": "Czech Republic",
    "DE": "Germany",
    "DK": "Denmark",
    "EE": "Estonia",
    "ES": "Spain",
    "FI": "Finland",
    "FR": "France",
    "GR": "Greece",
    "HR": "Croatia",
    "HU": "Hungary",
    "IE": "Ireland",
    "IT": "Italy",
    "LT": "Lithuania",
    "LU": "Luxembourg",
    "LV": "Latvia",
    "MT": "Malta",
    "NL": "Netherlands",
    "PL": "Poland",
    "PT": "Portugal",
    "RO": "Romania",
    "SE": "Sweden",
    "SI": "Slovenia",
    "SK": "Slovakia",
    "XI": "Northern Ireland",
}

QUALIFIED_RESULT_CODES: dict[str, str] = {
    "A": "Die Angaben stimmen mit den registrierten Daten überein.",
    "B": "Die Angaben stimmen mit den registrierten Daten nicht überein.",
    "C": "Die Angaben wurden nicht angefragt.",
    "D": "Die Angaben wurden vom EU-Mitgliedsstaat nicht mitgeteilt.",
}

# ---------------------------------------------------------------------------
# Status messages (normalized shape, keyed by status code)
# ---------------------------------------------------------------------------

_UNAVAILABLE = (
    "Eine Bearbeitung Ihrer Anfrage ist zurzeit nicht möglich. "
    "Bitte versuchen Sie es später noch einmal."
)

STATUS_MESSAGES: dict[str, dict] = {
    "evatr-0000": {
        "status": "evatr-0000",
        "category": "Result",
        "http": 200,
        "message": "Die angefragte Ust-IdNr. ist zum Anfragezeitpunkt gültig.",
    },
    "evatr-0001": {
        "status": "evatr-0001",
        "category": "Hint",
        "http": 400,
        "field": "datenschutz",
        "message": "Bitte bestätigen Sie den Datenschutzhinweis.",
    },
    "evatr-0002": {
        "status": "evatr-0002",
        "category": "Hint",
        "http": 400,
        "field": "angefragteUstid",
        "message": "Mindestens eins der Pflichtfelder ist nicht besetzt.",
    },
    "evatr-0003": {
        "status": "evatr-0003",
        "category": "Hint",
        "http": 400,
        "field": "firmenname,ort",
        "message": (
            "Die angefragte Ust-IdNr. ist zum Anfragezeitpunkt gültig. Mindestens eines der "
            "Pflichtfelder für eine qualifizierte Bestätigungsanfrage ist nicht besetzt."
        ),
    },
    "evatr-0004": {
        "status": "evatr-0004",
        "category": "Error",
        "http": 400,
        "field": "anfragendeUstid",
        "message": (
            "Die anfragende DE Ust-IdNr. ist syntaktisch falsch. "
            "Sie passt nicht in das deutsche Erzeugungsschema."
        ),
    },
    "evatr-0005": {
        "status": "evatr-0005",
        "category": "Error",
        "http": 400,
        "field": "angefragteUstid",
        "message": "Die angegebene angefragte Ust-IdNr. ist syntaktisch falsch.",
    },
    "evatr-0006": {
        "status": "evatr-0006",
        "category": "Hint",
        "http": 403,
        "field": "anfragendeUstid",
        "message": "Die anfragende DE USt-IdNr. ist nicht berechtigt eine DE Ust-IdNr. anzufragen.",
    },
    "evatr-0007": {
        "status": "evatr-0007",
        "category": "Hint",
        "http": 403,
        "message": "Fehlerhafter Aufruf.",
    },
    "evatr-0008": {
        "status": "evatr-0008",
        "category": "Hint",
        "http": 403,
        "message": (
            "Die maximale Anzahl von qualifizierten Bestätigungsabfragen für diese Session "
            "wurde erreicht. Bitte starten Sie erneut mit einer einfachen Bestätigungsabfrage."
        ),
    },
    "evatr-0011": {
        "status": "evatr-0011",
        "category": "Error",
        "http": 503,
        "message": _UNAVAILABLE,
    },
    "evatr-0012": {
        "status": "evatr-0012",
        "category": "Error",
        "http": 400,
        "field": "angefragteUstid",
        "message": (
            "Die angefragte USt-IdNr. ist syntaktisch falsch. "
            "Sie passt nicht in das Erzeugungsschema."
        ),
    },
    "evatr-0013": {
        "status": "evatr-0013",
        "category": "Error",
        "http": 503,
        "message": _UNAVAILABLE,
    },
    "evatr-1001": {
        "status": "evatr-1001",
        "category": "Error",
        "http": 503,
        "message": _UNAVAILABLE,
    },
    "evatr-1002": {
        "status": "evatr-1002",
        "category": "Error",
        "http": 500,
        "message": _UNAVAILABLE,
    },
    "evatr-1003": {
        "status": "evatr-1003",
        "category": "Error",
        "http": 500,
        "message": _UNAVAILABLE,
    },
    "evatr-1004": {
        "status": "evatr-1004",
        "category": "Error",
        "http": 500,
        "message": _UNAVAILABLE,
    },
    "evatr-2001": {
        "status": "evatr-2001",
        "category": "Hint",
        "http": 404,
        "field": "angefragteUstid",
        "message": "Die angefragte USt-IdNr. ist zum Anfragezeitpunkt nicht vergeben.",
    },
    "evatr-2002": {
        "status": "evatr-2002",
        "category": "Hint",
        "http": 200,
        "field": "angefragteUstid",
        "message": (
            "Die angefragte USt-IdNr. ist zum Anfragezeitpunkt nicht gültig. "
            "Sie ist erst gültig ab dem Datum im Feld gueltigAb."
        ),
    },
    "evatr-2003": {
        "status": "evatr-2003",
        "category": "Error",
        "http": 400,
        "field": "angefragteUstid",
        "message": "Das angegebene Länderkennzeichen der angefragten USt-IdNr. ist nicht gültig.",
    },
    "evatr-2004": {
        "status": "evatr-2004",
        "category": "Error",
        "http": 500,
        "message": _UNAVAILABLE,
    },
    "evatr-2005": {
        "status": "evatr-2005",
        "category": "Error",
        "http": 404,
        "field": "anfragendeUstid",
        "message": "Die angegebene eigene DE Ust-IdNr. ist zum Anfragezeitpunkt nicht gültig.",
    },
    "evatr-2006": {
        "status": "evatr-2006",
        "category": "Hint",
        "http": 200,
        "field": "angefragteUstid",
        "message": (
            "Die angefragte Ust-IdNr. ist zum Anfragezeitpunkt nicht gültig. Sie war gültig im "
            "Zeitraum, der durch die Werte in den Feldern gueltigAb und gueltigBis beschrieben ist."
        ),
    },
    "evatr-2007": {
        "status": "evatr-2007",
        "category": "Error",
        "http": 500,
        "message": (
            "Bei der Verarbeitung der Daten aus dem angefragten EU-Mitgliedstaat ist ein Fehler "
            "aufgetreten. Ihre Anfrage kann deshalb nicht bearbeitet werden."
        ),
    },
    "evatr-2008": {
        "status": "evatr-2008",
        "category": "Hint",
        "http": 200,
        "message": (
            "Die angefragte Ust-IdNr. ist zum Anfragezeitpunkt gültig. Für die qualifizierte "
            "Bestätigungsanfrage liegt einer Besonderheit vor. Für Rückfragen wenden Sie sich "
            "an das BZSt."
        ),
    },
    "evatr-2011": {
        "status": "evatr-2011",
        "category": "Error",
        "http": 500,
        "message": _UNAVAILABLE,
    },
    "evatr-3011": {
        "status": "evatr-3011",
        "category": "Error",
        "http": 500,
        "message": _UNAVAILABLE,
    },
}
