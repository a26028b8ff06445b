"""
Spreadsheet reader - reads only the first sheet of a workbook.
Later sheets are ignored; the first row of the sheet is the header.
"""

import io
from typing import List
import pandas as pd
from fileqa.core.errors import ReadError
from fileqa.core.logging import setup_logger
from .records import TabularRecord

logger = setup_logger()

# pandas engine per spreadsheet format
EXCEL_ENGINES = {
    'xlsx': 'openpyxl',
    'xls': 'xlrd'
}


def parse_excel(raw_bytes: bytes, file_format: str = 'xlsx') -> List[TabularRecord]:
    """
    Parse the first sheet of a workbook into tabular records.
    
    Args:
        raw_bytes: Workbook content
        file_format: 'xlsx' or 'xls'
        
    Returns:
        One TabularRecord per non-blank row. Empty cells are None.
        
    Raises:
        ReadError: If the workbook cannot be opened or parsed
    """
    engine = EXCEL_ENGINES.get(file_format, 'openpyxl')
    
    try:
        df = pd.read_excel(
            io.BytesIO(raw_bytes),
            sheet_name=0,
            header=0,
            dtype=object,
            engine=engine
        )
    except pd.errors.EmptyDataError:
        logger.info("Spreadsheet first sheet is empty, no records produced")
        return []
    except Exception as e:
        logger.error(f"Spreadsheet parsing failed ({engine}): {str(e)}")
        raise ReadError(f"Failed to parse spreadsheet: {str(e)}") from e
    
    # Rows with no values at all are not records
    df = df.dropna(how="all")
    df.columns = [str(column) for column in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    
    records = [TabularRecord(fields=row) for row in df.to_dict(orient="records")]
    
    logger.info(
        f"Spreadsheet parsed successfully - {len(records)} rows, "
        f"{len(df.columns)} columns (first sheet only)"
    )
    return records
