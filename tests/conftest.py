from __future__ import annotations

from io import BytesIO

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def abc_programs() -> pd.DataFrame:
    """A/B/C: two programs at X, one at Y with no tuition."""
    return pd.DataFrame(
        [
            {"institution_name": "X", "region": "R1", "tuition_value": 1000},
            {"institution_name": "X", "region": "R2", "tuition_value": 2000},
            {"institution_name": "Y", "region": "R1", "tuition_value": np.nan},
        ],
        index=["A", "B", "C"],
    )


@pytest.fixture
def programs() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "program_code": 101,
                "program_name": "Pediatría",
                "institution_name": "Universidad de Antioquia",
                "institution_code": 1201,
                "locality": "Medellín",
                "region": "Antioquia",
                "coverage_type": "Nacional",
                "tuition_value": 12000000,
                "notes": "carried through",
            },
            {
                "program_code": 102,
                "program_name": "Cirugía General",
                "institution_name": "Universidad Nacional de Colombia",
                "institution_code": 1101,
                "locality": "Bogotá D.C.",
                "region": "Bogotá D.C.",
                "coverage_type": "Nacional",
                "tuition_value": 8500000,
                "notes": None,
            },
            {
                "program_code": 103,
                "program_name": "Pediatría",
                "institution_name": "Universidad del Valle",
                "institution_code": 1203,
                "locality": "Cali",
                "region": "Valle del Cauca",
                "coverage_type": None,
                "tuition_value": None,
                "notes": None,
            },
            {
                "program_code": 104,
                "program_name": None,
                "institution_name": None,
                "institution_code": None,
                "locality": None,
                "region": None,
                "coverage_type": None,
                "tuition_value": None,
                "notes": None,
            },
            {
                "program_code": 105,
                "program_name": "Anestesiología",
                "institution_name": "Universidad de Antioquia",
                "institution_code": 1201,
                "locality": "Rionegro",
                "region": "Antioquia",
                "coverage_type": "Regional",
                "tuition_value": 0,
                "notes": None,
            },
        ]
    )


@pytest.fixture
def workbook_bytes() -> bytes:
    frame = pd.DataFrame(
        {
            "CÓDIGO_SNIES_DEL_PROGRAMA": [101, 102],
            "NOMBRE_DEL_PROGRAMA": ["Pediatría", "Cirugía General"],
            "NOMBRE_IES": ["Universidad de Antioquia", "Universidad Nacional de Colombia"],
            "CODIGO_IES": [1201, 1101],
            "MUNICIPIO": ["Medellín", "Bogotá D.C."],
            "DEPARTAMENTO": ["Antioquia", "Bogotá D.C."],
            "TIPO_CUBRIMIENTO": ["Nacional", "Nacional"],
            "VALOR_MATRICULA": [12000000, None],
            "OBSERVACIONES": ["ok", "revisar"],
        }
    )
    buf = BytesIO()
    frame.to_excel(buf, index=False, sheet_name="ESP_TOC")
    return buf.getvalue()
