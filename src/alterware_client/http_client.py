import os
import time
import logging
import requests
from pathlib import Path
from typing import Any

from .errors import TransportError

def _retry_after(value, default: int) -> int:
    """Seconds from a Retry-After header; HTTP-date values fall back to default."""
    if value is not None and str(value).strip().isdecimal():
        return int(value)
    return default

class HttpClient:
    def __init__(self, base_url: str, timeout: float = 10.0, max_retries: int = 3):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = requests.Session()

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, path: str, stream: bool = False) -> requests.Response:
        url = self.url_for(path)
        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.get(url, stream=stream, timeout=self.timeout)

                if response.status_code == 429:
                    retry_after = _retry_after(response.headers.get("Retry-After"), 2 ** attempt)
                    logging.warning(f"Rate limited. Waiting {retry_after} seconds.")
                    time.sleep(retry_after)
                    continue

                response.raise_for_status()
                return response

            except requests.RequestException as e:
                logging.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries + 1}): {e}")
                if attempt < self.max_retries:
                    sleep_time = 2 ** attempt # Exponential backoff
                    time.sleep(sleep_time)
        logging.error(f"Max retries reached for {url}")
        raise TransportError(f"Failed to fetch {url}")

    def get_text(self, path: str) -> str:
        return self._get(path).text

    def get_json(self, path: str) -> Any:
        response = self._get(path)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {response.url}: {e}") from e

    def download_file(self, path: str, destination: Path, chunk_size: int = 65536) -> int:
        """
        Stream a remote file to destination.

        The body is written to a sibling .part file and moved over the
        destination only once complete. Returns the number of bytes written.
        """
        response = self._get(path, stream=True)
        temp_path = destination.with_name(destination.name + ".part")
        written = 0
        try:
            with open(temp_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
            os.replace(temp_path, destination)
        except (requests.RequestException, OSError) as e:
            logging.error(f"Error writing download file {destination}: {e}")
            if temp_path.exists():
                temp_path.unlink()
            raise TransportError(f"Failed to download {self.url_for(path)}: {e}") from e
        finally:
            response.close()
        return written
