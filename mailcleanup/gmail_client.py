import os
import pickle
from typing import Any, Dict, Optional

import httplib2
from google.auth.transport.requests import Request
from google_auth_httplib2 import AuthorizedHttp
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError


class GmailClient:
    """Gmail API client for profile lookup and search size estimates"""

    # Read-only access is enough: this client never modifies the mailbox
    SCOPES = [
        'https://www.googleapis.com/auth/gmail.readonly'
    ]

    def __init__(self, credentials_json_path: str = "credentials.json", token_path: str = "token.pickle",
                 timeout: Optional[float] = 30, verbose: bool = True):
        """
        Initialize Gmail OAuth2 client

        Args:
            credentials_json_path: Path to the credentials.json file from Google Cloud Console
            token_path: Where the OAuth token is cached between runs
            timeout: Per-request socket timeout in seconds (None for no timeout)
            verbose: Whether to print diagnostic messages
        """
        self.credentials_path = credentials_json_path
        self.token_path = token_path
        self.timeout = timeout
        self.verbose = verbose
        self.service = None
        self.connected = False

    def _get_credentials(self):
        """Get OAuth2 credentials for Gmail API"""
        creds = None

        # Load existing credentials from the token cache
        if os.path.exists(self.token_path):
            with open(self.token_path, 'rb') as token:
                creds = pickle.load(token)

        # If no valid credentials, get new ones
        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                flow = InstalledAppFlow.from_client_secrets_file(
                    self.credentials_path, self.SCOPES)
                creds = flow.run_local_server(port=0)

            # Save credentials for next run
            with open(self.token_path, 'wb') as token:
                pickle.dump(creds, token)

        return creds

    def connect(self) -> None:
        """Establish connection to Gmail API"""
        try:
            creds = self._get_credentials()
            http = AuthorizedHttp(creds, http=httplib2.Http(timeout=self.timeout))
            self.service = build('gmail', 'v1', http=http)
            self.connected = True

        except Exception as e:
            raise ConnectionError(f"Failed to connect to Gmail API: {e}")

    def disconnect(self) -> None:
        """Close the Gmail API connection"""
        self.service = None
        self.connected = False

    def get_profile(self) -> Dict[str, Any]:
        """Fetch the account profile (emailAddress, messagesTotal, threadsTotal, historyId)"""
        if not self.connected:
            self.connect()

        try:
            profile = self.service.users().getProfile(userId='me').execute()
        except HttpError as error:
            raise RuntimeError(f"Gmail API error: {error}")

        if self.verbose:
            print(f"GmailClient: Profile loaded ({profile.get('messagesTotal', 'unknown')} messages)")
        return profile

    def messages_total(self) -> int:
        """Total number of messages in the account"""
        profile = self.get_profile()
        if 'messagesTotal' not in profile:
            raise RuntimeError("Gmail API error: profile response has no messagesTotal")
        return int(profile['messagesTotal'])

    def search_estimate(self, query: str) -> int:
        """
        Estimate how many messages match a Gmail search query

        Only one result is requested; the count comes from Gmail's
        resultSizeEstimate, which is approximate.

        Args:
            query: Gmail search expression, e.g. "category:promotions older_than:30d"

        Returns:
            Estimated number of matching messages
        """
        if not self.connected:
            self.connect()

        if self.verbose:
            print(f"GmailClient: Searching for: {query}")

        try:
            results = self.service.users().messages().list(
                userId='me',
                q=query,
                maxResults=1
            ).execute()
        except HttpError as error:
            raise RuntimeError(f"Gmail API error: {error}")

        estimate = results.get('resultSizeEstimate')
        if self.verbose:
            print(f"GmailClient: Got estimate {estimate if estimate is not None else 'unknown'} for '{query}'")
        return estimate

    def __enter__(self):
        """Context manager entry"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()
