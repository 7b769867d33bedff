"""
OCI Object Storage client

This module provides the client that turns object operations into signed
HTTP requests: it resolves physical object names, signs every attempt,
applies the retry policy and decodes responses.
"""

import json
import logging
import mimetypes
import threading
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import (
    Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union,
)
from urllib.parse import quote, urlencode

import requests
from requests.adapters import HTTPAdapter

from ..config.loader import ConnectionSettings
from ..config.settings import ConnectionConfig, ConnectionIdentity, StorageTier
from ..crypto.key_provider import KeyMaterial
from ..exceptions import (
    ExpiryInvalid,
    ExpiryTooLong,
    ObjectNotFound,
    OperationCancelled,
    ServerCommunicationError,
    ValidationError,
)
from ..logging_config import configure_logging
from ..signing.canonical_request import PRESIGNED_HEADERS, CanonicalRequestBuilder
from ..signing.digest import body_bytes
from ..signing.signer import RequestSigner
from ..signing.types import HttpMethod, RequestBody
from ..signing.utils import parse_url
from ..version import __version__
from .cancellation import CancellationToken
from .prefixer import PathPrefixer
from .retry import FailureClass, RetryPolicy, classify_exception, classify_status
from .types import (
    ObjectListing,
    ObjectMetadata,
    ObjectSummary,
    TemporaryUrl,
    TemporaryUrlOptions,
)

logger = logging.getLogger(__name__)

USER_AGENT = f"OCI-Storage-Python-SDK/{__version__}"
JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM = "application/octet-stream"

LIST_FIELDS = "name,size,timeModified,etag,storageTier"
MIN_RESTORE_HOURS = 10
MAX_RESTORE_HOURS = 240000

PRESIGN_EXPIRES_PARAM = "x-oci-expires"
PRESIGN_KEY_ID_PARAM = "x-oci-key-id"
PRESIGN_ALGORITHM_PARAM = "x-oci-algorithm"
PRESIGN_HEADERS_PARAM = "x-oci-signed-headers"
PRESIGN_SIGNATURE_PARAM = "x-oci-signature"

Contents = Union[str, bytes, bytearray, Any]
CopyPairs = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ObjectStorageClient:
    """
    Client for one OCI Object Storage bucket.

    The instance owns its configuration and identity and is safe to share
    between threads once constructed. Each operation accepts an optional
    ``CancellationToken``.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        identity: ConnectionIdentity,
        session: Optional[requests.Session] = None,
        signer: Optional[RequestSigner] = None,
        retry_policy: Optional[RetryPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Connection configuration
            identity: Signing identity; validated here, before any request
            session: Optional requests session (created if not provided)
            signer: Optional request signer
            retry_policy: Optional retry policy (derived from config if not provided)
            clock: Returns the current aware UTC datetime

        Raises:
            SignerConfigurationInvalid: If the identity is incomplete
        """
        identity.validate()

        self.config = config
        self.identity = identity
        self.prefixer = PathPrefixer(config.prefix)
        self.clock = clock or _utc_now
        self.signer = signer or RequestSigner(clock=lambda: self.clock().timestamp())
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=config.retry_attempts,
            base_delay=config.retry_delay,
            max_delay=config.retry_max_delay,
        )
        self.session = session or self._create_session()

        self._key_lock = threading.Lock()
        self._key_material: Optional[KeyMaterial] = None

        logger.info(
            f"Initialized OCI object storage client for bucket {config.bucket} "
            f"in {config.region} (namespace {config.namespace})"
        )

    def _create_session(self) -> requests.Session:
        """Create HTTP session; retries are driven by the retry policy, not urllib3."""
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Accept': 'application/json',
            'User-Agent': USER_AGENT,
        })
        return session

    # ------------------------------------------------------------------
    # Key material and URLs
    # ------------------------------------------------------------------

    def _key(self) -> KeyMaterial:
        """Resolve key material once per client and keep the parsed key."""
        with self._key_lock:
            if self._key_material is None:
                material = self.identity.key_provider.resolve()
                material.load_private_key()
                self._key_material = material
                logger.debug(f"Resolved signing key from {material.source}")
            return self._key_material

    def validate_key(self) -> bool:
        """Eagerly resolve and parse the private key, raising on failure."""
        self._key()
        return True

    @property
    def bucket_uri(self) -> str:
        return self.config.bucket_uri

    def object_url(self, physical_path: str) -> str:
        """URL of an object by its physical name."""
        return f"{self.bucket_uri}/o/{quote(physical_path, safe='')}"

    def _action_url(self, action: str) -> str:
        return f"{self.bucket_uri}/actions/{action}"

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------

    def _timeout(self, cancel_token: Optional[CancellationToken]) -> Tuple[float, float]:
        read_timeout = self.config.timeout
        if cancel_token is not None:
            remaining = cancel_token.remaining()
            if remaining is not None:
                read_timeout = max(0.001, min(read_timeout, remaining))
        return self.config.connect_timeout, read_timeout

    def _send(
        self,
        method: str,
        url: str,
        operation: str,
        path: Optional[str] = None,
        body: RequestBody = None,
        content_type: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        accept_statuses: Sequence[int] = (),
        cancel_token: Optional[CancellationToken] = None,
    ) -> requests.Response:
        """
        Sign and send a request, retrying transient failures.

        Every attempt is signed again so the date header stays fresh.

        Args:
            method: HTTP method
            url: Absolute request URL
            operation: Operation name for logs and errors
            path: Logical object path for logs and errors
            body: Request body for body-bearing methods
            content_type: Content type of the body
            headers: Extra unsigned headers
            accept_statuses: Error statuses that are returned instead of raised
            cancel_token: Optional cancellation signal

        Returns:
            requests.Response: The successful (or accepted) response

        Raises:
            ServerCommunicationError: When the request fails permanently or retries run out
            OperationCancelled: When the token is cancelled
        """
        http_method = HttpMethod.parse(method)
        data = body_bytes(body) if http_method.has_body else None
        key = self._key()
        attempt = 0

        while True:
            attempt += 1
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(operation, path)

            request_headers = dict(headers or {})
            request_headers.update(
                self.signer.sign_request(http_method, url, self.identity, key, data, content_type)
            )

            response = None
            error: Optional[requests.exceptions.RequestException] = None
            try:
                logger.debug(f"{operation}: {http_method.value} {url} (attempt {attempt})")
                response = self.session.request(
                    http_method.value,
                    url,
                    headers=request_headers,
                    data=data,
                    timeout=self._timeout(cancel_token),
                    verify=self.config.verify_ssl,
                    allow_redirects=False,
                )
            except requests.exceptions.RequestException as e:
                error = e
                failure = classify_exception(e)
            else:
                if response.status_code < 400 or response.status_code in accept_statuses:
                    return response
                failure = classify_status(response.status_code)

            decision = self.retry_policy.decide(attempt, failure)
            if not decision.retry:
                raise self._request_error(operation, path, http_method, url, attempt, failure, response, error)

            reason = f"HTTP {response.status_code}" if response is not None else type(error).__name__
            logger.warning(
                f"{operation} failed with {reason} (attempt {attempt}); "
                f"retrying in {decision.delay:.2f}s"
            )
            if response is not None:
                response.close()

            if cancel_token is not None:
                if cancel_token.wait(decision.delay):
                    raise OperationCancelled(
                        "Operation cancelled while waiting to retry",
                        operation=operation, path=path
                    )
            elif decision.delay > 0:
                time.sleep(decision.delay)

    def _request_error(
        self,
        operation: str,
        path: Optional[str],
        method: HttpMethod,
        url: str,
        attempts: int,
        failure: FailureClass,
        response: Optional[requests.Response],
        error: Optional[Exception],
    ) -> ServerCommunicationError:
        """Build the error raised for a failed request."""
        details: Dict[str, Any] = {"method": method.value, "url": url}

        if response is None:
            details["original_error"] = str(error)
            if isinstance(error, requests.exceptions.Timeout):
                message = f"Request timeout after {self.config.timeout} seconds"
                code = "TIMEOUT"
            elif isinstance(error, requests.exceptions.ConnectionError):
                message = f"Connection error: {error}"
                code = "CONNECTION_ERROR"
            else:
                message = f"Request failed: {error}"
                code = "REQUEST_FAILED"
            exc = ServerCommunicationError(
                message, code, details=details, failure_class=failure.value,
                attempts=attempts, operation=operation, path=path,
            )
            exc.__cause__ = error
            return exc

        code = "HTTP_ERROR"
        message = f"HTTP {response.status_code}: {response.reason}"
        try:
            error_data = response.json()
            if isinstance(error_data, dict):
                code = error_data.get("code", code)
                message = error_data.get("message", message)
        except ValueError:
            pass

        details["status_code"] = response.status_code
        details["opc_request_id"] = response.headers.get("opc-request-id")

        error_cls = ObjectNotFound if response.status_code == 404 else ServerCommunicationError
        return error_cls(
            f"Server request failed: {message}",
            error_code=code,
            http_status=response.status_code,
            details=details,
            failure_class=failure.value,
            attempts=attempts,
            operation=operation,
            path=path,
        )

    def _send_json(self, method: str, url: str, payload: Dict[str, Any], operation: str,
                   path: Optional[str] = None, **kwargs) -> requests.Response:
        return self._send(
            method, url, operation, path,
            body=json.dumps(payload), content_type=JSON_CONTENT_TYPE, **kwargs
        )

    # ------------------------------------------------------------------
    # Prefix helpers
    # ------------------------------------------------------------------

    def get_prefixed_path(self, path: str) -> str:
        return self.prefixer.apply(path)

    def remove_prefix_from_path(self, path: str) -> str:
        return self.prefixer.strip(path)

    def is_prefix_enabled(self) -> bool:
        return self.prefixer.is_enabled()

    def get_prefix(self) -> str:
        return self.prefixer.prefix

    # ------------------------------------------------------------------
    # Object operations
    # ------------------------------------------------------------------

    def put(
        self,
        path: str,
        contents: Contents,
        content_type: Optional[str] = None,
        storage_tier: Optional[Union[StorageTier, str]] = None,
        metadata: Optional[Mapping[str, str]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> None:
        """
        Upload an object.

        Args:
            path: Logical object path
            contents: str, bytes or a binary file-like object
            content_type: Content type (guessed from the path if omitted)
            storage_tier: Storage tier (connection default if omitted)
            metadata: User metadata, sent as ``opc-meta-*`` headers
        """
        if hasattr(contents, "read"):
            contents = contents.read()

        tier = StorageTier.from_string(storage_tier) if storage_tier else self.config.storage_tier
        headers = {"storage-tier": tier.value}
        for name, value in (metadata or {}).items():
            headers[f"opc-meta-{name}"] = value

        content_type = content_type or mimetypes.guess_type(path)[0] or OCTET_STREAM
        physical = self.prefixer.apply(path)

        self._send(
            "PUT", self.object_url(physical), "put", path,
            body=contents, content_type=content_type, headers=headers,
            cancel_token=cancel_token,
        )
        logger.debug(f"Stored object {physical}")

    def get(self, path: str, cancel_token: Optional[CancellationToken] = None) -> bytes:
        """
        Download an object.

        Raises:
            ObjectNotFound: If the object does not exist
        """
        physical = self.prefixer.apply(path)
        response = self._send("GET", self.object_url(physical), "get", path, cancel_token=cancel_token)
        return response.content

    def read_text(self, path: str, encoding: str = "utf-8",
                  cancel_token: Optional[CancellationToken] = None) -> str:
        return self.get(path, cancel_token=cancel_token).decode(encoding)

    def exists(self, path: str, cancel_token: Optional[CancellationToken] = None) -> bool:
        physical = self.prefixer.apply(path)
        response = self._send(
            "HEAD", self.object_url(physical), "exists", path,
            accept_statuses=(404,), cancel_token=cancel_token,
        )
        return response.status_code != 404

    def get_metadata(self, path: str,
                     cancel_token: Optional[CancellationToken] = None) -> Optional[ObjectMetadata]:
        """Object metadata, or None if the object does not exist."""
        physical = self.prefixer.apply(path)
        response = self._send(
            "HEAD", self.object_url(physical), "get_metadata", path,
            accept_statuses=(404,), cancel_token=cancel_token,
        )
        if response.status_code == 404:
            return None
        return ObjectMetadata.from_headers(path, response.headers)

    def delete(self, path: str, cancel_token: Optional[CancellationToken] = None) -> bool:
        """
        Delete an object.

        Returns:
            bool: False if the object did not exist
        """
        physical = self.prefixer.apply(path)
        response = self._send(
            "DELETE", self.object_url(physical), "delete", path,
            accept_statuses=(404,), cancel_token=cancel_token,
        )
        if response.status_code == 404:
            logger.debug(f"Delete of missing object {physical}")
            return False
        return True

    def copy(self, source: str, destination: str,
             cancel_token: Optional[CancellationToken] = None) -> Optional[str]:
        """
        Copy an object within the bucket.

        The service copies asynchronously.

        Returns:
            str: Work request id, if the service returned one
        """
        payload = {
            "sourceObjectName": self.prefixer.apply(source),
            "destinationRegion": self.config.region,
            "destinationNamespace": self.config.namespace,
            "destinationBucket": self.config.bucket,
            "destinationObjectName": self.prefixer.apply(destination),
        }
        response = self._send_json(
            "POST", self._action_url("copyObject"), payload, "copy", source, cancel_token=cancel_token
        )
        return response.headers.get("opc-work-request-id")

    def move(self, source: str, destination: str,
             cancel_token: Optional[CancellationToken] = None) -> None:
        """Rename an object; the service does this atomically."""
        payload = {
            "sourceName": self.prefixer.apply(source),
            "newName": self.prefixer.apply(destination),
        }
        self._send_json(
            "POST", self._action_url("renameObject"), payload, "move", source, cancel_token=cancel_token
        )

    def list(
        self,
        path: str = "",
        recursive: bool = True,
        limit: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ObjectListing:
        """
        List objects under a logical directory.

        Args:
            path: Logical directory; empty lists everything under the prefix
            recursive: If False, only direct children are returned and
                subdirectories are reported in ``prefixes``
            limit: Maximum number of objects to return
        """
        directory = path.strip("/")
        if directory:
            physical_prefix = self.prefixer.apply(directory + "/")
        elif self.prefixer.is_enabled():
            physical_prefix = self.prefixer.apply("")
        else:
            physical_prefix = ""

        params: Dict[str, Any] = {"fields": LIST_FIELDS}
        if physical_prefix:
            params["prefix"] = physical_prefix
        if not recursive:
            params["delimiter"] = "/"

        listing = ObjectListing()
        start = None

        while True:
            if start:
                params["start"] = start
            if limit is not None:
                params["limit"] = limit - len(listing.objects)

            url = f"{self.bucket_uri}/o?{urlencode(params)}"
            response = self._send("GET", url, "list", path, cancel_token=cancel_token)
            data = response.json() or {}

            for entry in data.get("objects", []):
                name = entry.get("name", "")
                if name == physical_prefix:
                    # directory placeholder
                    continue
                listing.objects.append(ObjectSummary.from_api(self.prefixer.strip(name), entry))

            for prefix in data.get("prefixes", []):
                listing.prefixes.append(self.prefixer.strip(prefix))

            start = data.get("nextStartWith")
            if not start or (limit is not None and len(listing.objects) >= limit):
                break

        return listing

    def set_storage_tier(self, path: str, tier: Union[StorageTier, str],
                         cancel_token: Optional[CancellationToken] = None) -> None:
        tier = StorageTier.from_string(tier)
        payload = {"objectName": self.prefixer.apply(path), "storageTier": tier.value}
        self._send_json(
            "POST", self._action_url("updateObjectStorageTier"), payload,
            "set_storage_tier", path, cancel_token=cancel_token,
        )

    def restore_objects(self, paths: Sequence[str], hours: int = 24, max_workers: int = 1,
                        cancel_token: Optional[CancellationToken] = None) -> Dict[str, bool]:
        """
        Restore archived objects for a number of hours.

        Raises:
            ValidationError: If hours is outside 10..240000
        """
        if not MIN_RESTORE_HOURS <= hours <= MAX_RESTORE_HOURS:
            raise ValidationError(
                f"Hours must be between {MIN_RESTORE_HOURS} and {MAX_RESTORE_HOURS}",
                details={"hours": hours}, operation="restore_objects"
            )

        def restore(path: str) -> None:
            payload = {"objectName": self.prefixer.apply(path), "hours": hours}
            self._send_json(
                "POST", self._action_url("restoreObjects"), payload,
                "restore_objects", path, cancel_token=cancel_token,
            )

        return self._run_bulk("restore_objects", list(paths), restore, max_workers)

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def _run_bulk(self, operation: str, items: List[Any], action: Callable[[Any], Any],
                  max_workers: int = 1, key: Callable[[Any], str] = lambda item: item) -> Dict[str, bool]:
        """
        Run an action for every item independently.

        Request failures mark the item False; configuration and signing
        errors still propagate because no item could succeed. Repeated
        items run once. Items sharing a result key are True only if all
        of them succeeded.
        """
        items = list(dict.fromkeys(items))

        def run(item: Any) -> bool:
            try:
                result = action(item)
            except (ServerCommunicationError, OperationCancelled) as e:
                logger.error(f"{operation} failed for {key(item)}: {e}")
                return False
            return result is not False

        if max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outcomes = list(executor.map(run, items))
        else:
            outcomes = [run(item) for item in items]

        results: Dict[str, bool] = {}
        for item, outcome in zip(items, outcomes):
            name = key(item)
            results[name] = results.get(name, True) and outcome
        return results

    def bulk_delete(self, paths: Sequence[str], max_workers: int = 1,
                    cancel_token: Optional[CancellationToken] = None) -> Dict[str, bool]:
        """
        Delete many objects.

        Returns:
            dict: Path to True if deleted, False if missing or failed, in input order
        """
        return self._run_bulk(
            "bulk_delete", list(paths),
            lambda path: self.delete(path, cancel_token=cancel_token),
            max_workers,
        )

    def bulk_copy(self, pairs: CopyPairs, max_workers: int = 1,
                  cancel_token: Optional[CancellationToken] = None) -> Dict[str, bool]:
        """
        Copy many objects.

        Args:
            pairs: Mapping or sequence of (source, destination)

        Returns:
            dict: Source path to success flag, in input order; a source copied
                to several destinations is True only if every copy succeeded
        """
        items = list(pairs.items()) if isinstance(pairs, Mapping) else [tuple(p) for p in pairs]
        return self._run_bulk(
            "bulk_copy", items,
            lambda pair: self.copy(pair[0], pair[1], cancel_token=cancel_token),
            max_workers,
            key=lambda pair: pair[0],
        )

    # ------------------------------------------------------------------
    # Temporary URLs
    # ------------------------------------------------------------------

    def _resolve_expiry(
        self,
        expires_at: Optional[datetime],
        expires_in: Optional[Union[int, float, timedelta]],
        path: str,
        operation: str,
    ) -> Tuple[datetime, datetime]:
        """Work out the expiry and check it against the policy before any signing."""
        now = self.clock()

        if expires_at is not None and expires_in is not None:
            raise ValidationError(
                "Pass either expires_at or expires_in, not both", operation=operation, path=path
            )

        if expires_in is not None:
            if not isinstance(expires_in, timedelta):
                expires_in = timedelta(seconds=expires_in)
            expiry = now + expires_in
        elif expires_at is not None:
            expiry = expires_at if expires_at.tzinfo else expires_at.replace(tzinfo=timezone.utc)
        else:
            expiry = now + timedelta(seconds=self.config.temporary_url_default_expiry)

        # whole seconds, as carried by x-oci-expires
        expiry = expiry.replace(microsecond=0)

        if expiry <= now:
            raise ExpiryInvalid(
                "Temporary URL expiry must be in the future",
                details={"expires_at": expiry.isoformat(), "now": now.isoformat()},
                operation=operation, path=path,
            )

        max_expiry = timedelta(seconds=self.config.temporary_url_max_expiry)
        if expiry - now > max_expiry:
            raise ExpiryTooLong(
                f"Temporary URL expiry exceeds the maximum of {self.config.temporary_url_max_expiry} seconds",
                details={
                    "expires_at": expiry.isoformat(),
                    "max_expiry": self.config.temporary_url_max_expiry,
                },
                operation=operation, path=path,
            )

        return now, expiry

    def create_temporary_url(
        self,
        path: str,
        expires_at: Optional[datetime] = None,
        expires_in: Optional[Union[int, float, timedelta]] = None,
        options: Optional[TemporaryUrlOptions] = None,
    ) -> TemporaryUrl:
        """
        Create a pre-signed GET URL for an object.

        The expiry is part of the signed request target, so the service can
        reject the URL once it has passed. Nothing is stored server-side.

        Args:
            path: Logical object path
            expires_at: Absolute expiry time
            expires_in: Lifetime in seconds or as a timedelta
            options: Extra response parameters

        Raises:
            ExpiryInvalid: If the expiry is not in the future
            ExpiryTooLong: If the expiry exceeds the configured maximum
        """
        _, expiry = self._resolve_expiry(expires_at, expires_in, path, "create_temporary_url")
        expires = int(expiry.timestamp())

        params = list((options or TemporaryUrlOptions()).query_params().items())
        params.append((PRESIGN_EXPIRES_PARAM, str(expires)))

        base_url = f"{self.object_url(self.prefixer.apply(path))}?{urlencode(params)}"
        url_parts = parse_url(base_url)

        canonical = CanonicalRequestBuilder(
            HttpMethod.GET, url_parts["target"], {"host": url_parts["host"]}, PRESIGNED_HEADERS
        ).build()
        signature = self.signer.sign_canonical(canonical, self.identity, self._key())

        auth_params = urlencode([
            (PRESIGN_KEY_ID_PARAM, signature.key_id),
            (PRESIGN_ALGORITHM_PARAM, signature.algorithm.value),
            (PRESIGN_HEADERS_PARAM, " ".join(signature.header_names)),
            (PRESIGN_SIGNATURE_PARAM, signature.value),
        ])

        logger.debug(f"Created temporary URL for {path} expiring at {expiry.isoformat()}")
        return TemporaryUrl(path=path, url=f"{base_url}&{auth_params}", expires_at=expiry)

    def create_pre_authenticated_request(
        self,
        path: str,
        expires_at: Optional[datetime] = None,
        expires_in: Optional[Union[int, float, timedelta]] = None,
        access_type: str = "ObjectRead",
        cancel_token: Optional[CancellationToken] = None,
    ) -> TemporaryUrl:
        """
        Create a server-side pre-authenticated request for an object.

        Same expiry policy as ``create_temporary_url``.
        """
        _, expiry = self._resolve_expiry(expires_at, expires_in, path, "create_pre_authenticated_request")

        payload = {
            "accessType": access_type,
            "name": str(uuid.uuid4()),
            "objectName": self.prefixer.apply(path),
            "timeExpires": expiry.astimezone(timezone.utc).isoformat(),
        }
        response = self._send_json(
            "POST", f"{self.bucket_uri}/p/", payload,
            "create_pre_authenticated_request", path, cancel_token=cancel_token,
        )
        data = response.json()

        url = data.get("fullPath") or f"{self.config.host_url}{data.get('accessUri', '')}"
        return TemporaryUrl(path=path, url=url, expires_at=expiry)

    # ------------------------------------------------------------------
    # Connection helpers
    # ------------------------------------------------------------------

    def test_connection(self) -> bool:
        """Check that the bucket can be listed with the configured credentials."""
        try:
            self.list(limit=1)
            return True
        except ServerCommunicationError as e:
            logger.warning(f"Connection test failed: {e}")
            return False

    def connection_summary(self) -> Dict[str, Any]:
        summary = self.config.summary()
        summary["key_id"] = self.identity.key_id
        return summary

    def close(self):
        """Close the HTTP session."""
        if hasattr(self, 'session'):
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "ObjectStorageClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_client(settings: ConnectionSettings, **kwargs) -> ObjectStorageClient:
    """
    Create an object storage client from loaded connection settings.

    Applies the logging settings before the client is built.

    Args:
        settings: Result of one of the ``load_connection_*`` loaders
        **kwargs: Passed through to ``ObjectStorageClient``
    """
    configure_logging(settings.logging)
    return ObjectStorageClient(settings.config, settings.identity, **kwargs)
