# services/report_service.py
import os
import logging
import pandas as pd

from storage.local_storage import save_excel

logger = logging.getLogger(__name__)


class ReportService:
    """Excel export of inspection reports"""

    def __init__(self, excel_folder):
        self.excel_folder = excel_folder

    @staticmethod
    def build_report_frames(result):
        """
        Build report sheets for an inspection

        Args:
            result: InspectionResult

        Returns:
            dict: Sheet name -> DataFrame (Summary, Composition, Defects)
        """
        summary = pd.DataFrame([
            {'Field': 'Inspection ID', 'Value': result.id},
            {'Field': 'Name', 'Value': result.name},
            {'Field': 'Standard', 'Value': result.standard_name},
            {'Field': 'Total Sample', 'Value': result.total_sample},
            {'Field': 'Created At', 'Value': result.created_at},
            {'Field': 'Updated At', 'Value': result.updated_at},
            {'Field': 'Note', 'Value': result.note},
            {'Field': 'Price', 'Value': result.price},
            {'Field': 'Date/Time of Sampling', 'Value': result.date_time_of_sampling},
            {'Field': 'Sampling Point', 'Value': result.sampling_point},
        ])

        composition = pd.DataFrame(
            [
                {'Name': row.name, 'Length': row.length, 'Actual': row.actual}
                for row in result.composition
            ],
            columns=['Name', 'Length', 'Actual']
        )

        defects = pd.DataFrame(
            [{'Name': row.name, 'Actual': row.actual} for row in result.defect_rice],
            columns=['Name', 'Actual']
        )

        return {
            'Summary': summary,
            'Composition': composition,
            'Defects': defects,
        }

    def export_excel(self, result):
        """
        Write the report workbook for an inspection

        Returns:
            str: Excel filename inside the excel folder

        Raises:
            OSError: Workbook could not be written
        """
        excel_filename = f"{result.id}_report.xlsx"
        filepath = os.path.join(self.excel_folder, excel_filename)

        if not save_excel(self.build_report_frames(result), filepath):
            raise OSError(f"Failed to write report {excel_filename}")

        logger.info(f"Inspection report saved: {filepath}")
        return excel_filename
