import logging
from pathlib import Path

from .errors import ManifestError
from .http_client import HttpClient
from .integrity import sha1_file, hashes_match, validate_download
from .manifest import FILES_PATH, ManifestApi
from .models import GameDefinition, ManifestEntry, SyncReport


class Synchronizer:
    """
    Brings a game directory in line with files.json.

    Entries are processed one at a time in manifest order. Files are only
    ever added or overwritten, never deleted. The first transport error
    aborts the pass; the next run recomputes the diff and picks up the rest.
    """

    def __init__(self, manifest_api: ManifestApi, master_client: HttpClient):
        self.manifest_api = manifest_api
        self.master_client = master_client

    def _local_path(self, game: GameDefinition, entry: ManifestEntry, target_dir: Path) -> Path:
        relative = Path(game.local_name(entry.name))
        if not relative.parts or relative.is_absolute() or ".." in relative.parts:
            raise ManifestError(f"Refusing unsafe manifest entry: {entry.name}")
        return target_dir / relative

    def _download(self, entry: ManifestEntry, file_path: Path) -> bool:
        self.master_client.download_file(self.manifest_api.file_path(entry), file_path)
        return validate_download(file_path, entry.hash, entry.size)

    def synchronize(self, game: GameDefinition, target_dir: Path) -> SyncReport:
        report = SyncReport()

        for entry in self.manifest_api.fetch_files():
            if not game.owns(entry.name):
                report.ignored += 1
                continue

            file_path = self._local_path(game, entry, target_dir)
            if file_path.exists():
                local_hash = sha1_file(file_path).lower()
                remote_hash = entry.hash.lower()
                if hashes_match(local_hash, remote_hash):
                    report.skipped += 1
                    continue
                logging.info(f"Updating {file_path}...\nLocal hash: {local_hash}\nRemote hash: {remote_hash}")
            else:
                logging.info(f"Downloading {file_path}...")
                file_path.parent.mkdir(parents=True, exist_ok=True)

            if not self._download(entry, file_path):
                report.unverified.append(entry.name)
            report.downloaded.append(entry.name)

        logging.info(
            f"{game.engine}: {len(report.downloaded)} downloaded, {report.skipped} up to date"
        )
        if report.unverified:
            logging.warning(f"{len(report.unverified)} file(s) still differ from {FILES_PATH}, they will be retried next run")
        return report
