"""
HTTP client for the PlugConta bank-statement API.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, BinaryIO, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import requests

from .config import ClientConfig
from .errors import classify_response
from .executor import execute
from .request import Header, ParamLike, QueryParam, build_request, normalize_params
from .response import ApiResponse

__all__ = ["PlugContaClient", "only_digits"]

PAYER_HEADER = "payercpfcnpj"

StatementFile = Union[str, os.PathLike, BinaryIO, Tuple[str, Any], Tuple[str, Any, str]]


def only_digits(value: str) -> str:
    """Strip everything but digits from a CPF/CNPJ."""
    return re.sub(r"\D", "", value or "")


def _require(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValueError(f"{field_name} must not be empty")
    return str(value).strip()


def _payer_headers(cpfcnpj: str) -> List[Header]:
    digits = only_digits(cpfcnpj)
    if not digits:
        raise ValueError("cpfcnpj must contain at least one digit")
    return [(PAYER_HEADER, digits)]


class PlugContaClient:
    """
    Client for payer, account and statement endpoints.

    The configuration is an immutable :class:`ClientConfig`; the setters below
    replace it with an updated copy. Operations that need a different upload or
    decode mode derive a one-off copy instead of touching ``self.config``.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        production: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config if config is not None else ClientConfig(production=production)
        self.session = session or requests.Session()

    def __enter__(self) -> "PlugContaClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    # configuration surface

    def _set(self, **changes: Any) -> None:
        self.config = replace(self.config, **changes)

    @property
    def production(self) -> bool:
        return self.config.production

    @production.setter
    def production(self, value: bool) -> None:
        self._set(production=bool(value))

    @property
    def credential_id(self) -> str:
        return self.config.credential_id

    @credential_id.setter
    def credential_id(self, value: str) -> None:
        self._set(credential_id=value)

    @property
    def credential_token(self) -> str:
        return self.config.credential_token

    @credential_token.setter
    def credential_token(self, value: str) -> None:
        self._set(credential_token=value)

    @property
    def upload(self) -> bool:
        return self.config.upload

    @upload.setter
    def upload(self, value: bool) -> None:
        self._set(upload=bool(value))

    @property
    def decode(self) -> bool:
        return self.config.decode

    @decode.setter
    def decode(self, value: bool) -> None:
        self._set(decode=bool(value))

    @property
    def debug(self) -> bool:
        return self.config.debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._set(debug=bool(value))

    # request primitives

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Iterable[ParamLike]] = None,
        body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Sequence[Header]] = None,
        config: Optional[ClientConfig] = None,
        timeout: Optional[float] = None,
        include_defaults: bool = True,
    ) -> ApiResponse:
        """
        Build and send one request, returning the result whatever its status.

        ``config`` replaces the client configuration for this call only.
        """
        snapshot = config if config is not None else self.config
        call = build_request(
            method,
            path,
            snapshot,
            params=params,
            body=body,
            headers=headers,
            include_defaults=include_defaults,
        )
        return execute(self.session, call, snapshot, timeout=timeout)

    def get(
        self,
        path: str,
        params: Optional[Iterable[ParamLike]] = None,
        headers: Optional[Sequence[Header]] = None,
        **kwargs: Any,
    ) -> ApiResponse:
        return self.request("GET", path, params=params, headers=headers, **kwargs)

    def post(
        self,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        params: Optional[Iterable[ParamLike]] = None,
        headers: Optional[Sequence[Header]] = None,
        **kwargs: Any,
    ) -> ApiResponse:
        return self.request("POST", path, params=params, body=body, headers=headers, **kwargs)

    def put(
        self,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        params: Optional[Iterable[ParamLike]] = None,
        headers: Optional[Sequence[Header]] = None,
        **kwargs: Any,
    ) -> ApiResponse:
        return self.request("PUT", path, params=params, body=body, headers=headers, **kwargs)

    def delete(
        self,
        path: str,
        params: Optional[Iterable[ParamLike]] = None,
        headers: Optional[Sequence[Header]] = None,
        **kwargs: Any,
    ) -> ApiResponse:
        return self.request("DELETE", path, params=params, headers=headers, **kwargs)

    def options(
        self,
        path: str,
        params: Optional[Iterable[ParamLike]] = None,
        headers: Optional[Sequence[Header]] = None,
        **kwargs: Any,
    ) -> ApiResponse:
        # OPTIONS goes out with the caller's headers only
        return self.request(
            "OPTIONS", path, params=params, headers=headers, include_defaults=False, **kwargs
        )

    # payers

    def get_payer(
        self,
        cpfcnpj: str,
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        return classify_response(self.get("payer", params, _payer_headers(cpfcnpj), timeout=timeout))

    def create_payer(
        self,
        payer: Mapping[str, Any],
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        logging.info("Registering payer")
        return classify_response(self.post("payer", payer, params, timeout=timeout))

    def update_payer(
        self,
        cpfcnpj: str,
        payer: Mapping[str, Any],
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        return classify_response(
            self.put("payer", payer, params, _payer_headers(cpfcnpj), timeout=timeout)
        )

    # accounts

    def list_accounts(
        self,
        cpfcnpj: str,
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        return classify_response(self.get("account", params, _payer_headers(cpfcnpj), timeout=timeout))

    def create_account(
        self,
        cpfcnpj: str,
        account: Mapping[str, Any],
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        logging.info("Registering bank account")
        return classify_response(
            self.post("account", account, params, _payer_headers(cpfcnpj), timeout=timeout)
        )

    def get_account(
        self,
        account_hash: str,
        cpfcnpj: str,
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        path = f"account/{_require(account_hash, 'account_hash')}"
        return classify_response(self.get(path, params, _payer_headers(cpfcnpj), timeout=timeout))

    def update_account(
        self,
        account_hash: str,
        cpfcnpj: str,
        account: Mapping[str, Any],
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        path = f"account/{_require(account_hash, 'account_hash')}"
        return classify_response(
            self.put(path, account, params, _payer_headers(cpfcnpj), timeout=timeout)
        )

    # statements

    def upload_statement(
        self,
        cpfcnpj: str,
        file: StatementFile,
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        """
        Send a statement file for parsing as multipart form-data.

        ``file`` may be a path, an open binary file or a
        ``(filename, data[, content_type])`` tuple whose ``data`` is bytes or
        a binary file.
        """
        headers = _payer_headers(cpfcnpj)
        upload_config = replace(self.config, upload=True)
        if isinstance(file, (str, os.PathLike)):
            path = Path(file)
            logging.info("Uploading statement %s", path.name)
            with path.open("rb") as handle:
                response = self.post(
                    "statement/parser", {"file": handle}, params, headers,
                    config=upload_config, timeout=timeout,
                )
        else:
            response = self.post(
                "statement/parser", {"file": file}, params, headers,
                config=upload_config, timeout=timeout,
            )
        return classify_response(response)

    def get_statement_parse_result(
        self,
        statement_id: str,
        cpfcnpj: str,
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        path = f"statement/parser/{_require(statement_id, 'statement_id')}"
        return classify_response(self.get(path, params, _payer_headers(cpfcnpj), timeout=timeout))

    def get_statements_by_period(
        self,
        cpfcnpj: str,
        date_start: str,
        date_end: str,
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        """
        List statements between ``date_start`` and ``date_end``.

        Caller-supplied ``dateStart``/``dateEnd`` params are replaced by the
        explicit arguments.
        """
        date_start = _require(date_start, "date_start")
        date_end = _require(date_end, "date_end")
        query = [
            param
            for param in normalize_params(params)
            if param.name not in ("dateStart", "dateEnd")
        ]
        query.append(QueryParam("dateStart", date_start))
        query.append(QueryParam("dateEnd", date_end))
        return classify_response(
            self.get("statement", query, _payer_headers(cpfcnpj), timeout=timeout)
        )

    def download_statement(
        self,
        statement_id: str,
        cpfcnpj: str,
        params: Optional[Iterable[ParamLike]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        """
        Fetch the original statement file. On success ``body`` holds raw bytes;
        error bodies are still decoded.
        """
        path = f"statement/{_require(statement_id, 'statement_id')}/download"
        raw_config = replace(self.config, decode=False)
        return classify_response(
            self.get(path, params, _payer_headers(cpfcnpj), config=raw_config, timeout=timeout)
        )
