import os
from datetime import datetime

from .export_request_interpreter import ExportRequestInterpreter
from ...config.settings import ExportConfig
from ...utils.logger.logger import Logger


class ExportManager:
    def __init__(self, config: ExportConfig = None):
        self.interpreter = ExportRequestInterpreter(config)

    def handle_export_request(self, systems, export_request):
        """
        Parse request, run strategies, and save outputs.

        Returns:
            Path of the timestamped folder the files were written to.
        """
        try:
            export_request_data = self.interpreter.parse_request(export_request)
            strategies = export_request_data['export_strategies']
            base_folder_location = export_request_data['folder_location']
            base_name = export_request_data['base_name']

            self._verify_folder(base_folder_location)

            files = []
            for strategy in strategies:
                files.extend(strategy.generate_export(systems, base_name))

            return self._save_export(files, base_folder_location)

        except Exception as ex:
            Logger.log(f"Error handling export request: {str(ex)}", Logger.LogPriority.ERROR)
            raise

    def _create_export_folder(self, base_folder_location):
        """Create timestamped root folder for this export."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        root_folder = os.path.join(base_folder_location, f"export_{timestamp}")

        if not os.path.exists(root_folder):
            try:
                os.makedirs(root_folder)
                Logger.log(f"Created root folder: {root_folder}")
            except OSError as e:
                Logger.log(f"Error creating root folder {root_folder}: {e}")
                raise

        return root_folder

    def _save_export(self, files, base_folder_location):
        root_folder = self._create_export_folder(base_folder_location)
        self._save_files(files, root_folder)
        return root_folder

    def _save_files(self, files, folder_location):
        """Write each (filename, bytes) to disk."""
        if not files:
            return

        for filename, content in files:
            file_path = os.path.join(folder_location, filename)
            try:
                with open(file_path, 'wb') as f:
                    f.write(content)
                Logger.log(f"Saved file: {file_path}")
            except OSError as e:
                Logger.log(f"Error saving file {file_path}: {e}")
                raise

    def _verify_folder(self, folder_path):
        """Ensure base folder exists and is a directory."""
        if not os.path.exists(folder_path):
            try:
                os.makedirs(folder_path)
                Logger.log(f"Created folder: {folder_path}")
            except OSError as e:
                Logger.log(f"Error creating folder {folder_path}: {e}")
                raise
        elif not os.path.isdir(folder_path):
            Logger.log(f"{folder_path} exists but is not a directory.")
            raise ValueError(f"{folder_path} exists but is not a directory.")
        Logger.log(f"Folder verified: {folder_path}")
