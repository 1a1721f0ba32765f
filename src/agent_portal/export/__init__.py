from .csv_exporter import export_csv, export_filename, to_csv

__all__ = ["export_csv", "export_filename", "to_csv"]
