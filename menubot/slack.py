import logging
import os
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)


class SlackAPIError(RuntimeError):
    pass


class SlackAPI:

    SLACK_API_URL = 'https://slack.com/api'
    TIMEOUT = 30

    def __init__(self, token: str, channel_id: str):
        self.token = token
        self.channel_id = channel_id

    @property
    def headers(self) -> dict:
        return {'Authorization': f'Bearer {self.token}'}

    def _check(self, response: requests.Response, method: str) -> dict:
        response.raise_for_status()
        data = response.json()
        if not data.get('ok'):
            raise SlackAPIError(f"{method} failed: {data.get('error', 'unknown error')}")
        return data

    def call(self, method: str, data: Optional[dict] = None, json: Optional[dict] = None) -> dict:
        url = f"{self.SLACK_API_URL}/{method}"
        response = requests.post(url, headers=self.headers, data=data, json=json, timeout=self.TIMEOUT)
        return self._check(response, method)

    def get_upload_url(self, filename: str, length: int) -> Tuple[str, str]:
        data = self.call('files.getUploadURLExternal', data={'filename': filename, 'length': length})
        return data['upload_url'], data['file_id']

    def complete_upload(self, file_id: str, title: str) -> str:
        data = self.call('files.completeUploadExternal', json={'files': [{'id': file_id, 'title': title}]})
        files = data.get('files') or []
        if not files or not files[0].get('permalink'):
            raise SlackAPIError(f"files.completeUploadExternal returned no permalink for {file_id}")
        return files[0]['permalink']

    def upload_file(self, path: str) -> str:
        filename = os.path.basename(path)
        upload_url, file_id = self.get_upload_url(filename, os.path.getsize(path))

        with open(path, 'rb') as f:
            response = requests.post(upload_url, data=f, timeout=self.TIMEOUT)
        response.raise_for_status()

        permalink = self.complete_upload(file_id, filename)
        logger.info("Uploaded %s: %s", filename, permalink)
        return permalink

    def post_message(self, text: str) -> dict:
        return self.call('chat.postMessage', json={'channel': self.channel_id, 'text': text})
