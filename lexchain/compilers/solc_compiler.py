"""py-solc-x compiler wrapper."""

import json
import logging
from typing import Any, Dict

import solcx
from solcx.exceptions import SolcError

from .base import BaseSolidityCompiler

logger = logging.getLogger(__name__)


class SolcxCompiler(BaseSolidityCompiler):
    """
    Local solc binary managed by py-solc-x.

    The requested version is installed on first use. Diagnostics are
    returned rather than raised so the adapter can classify them.
    """

    def __init__(self, version: str = "0.8.20"):
        self._version = version
        self._installed = False

    @property
    def version(self) -> str:
        return self._version

    def _ensure_installed(self):
        if self._installed:
            return
        installed = {str(v) for v in solcx.get_installed_solc_versions()}
        if self._version not in installed:
            logger.info(f"Installing solc {self._version}...")
            solcx.install_solc(self._version)
        self._installed = True

    def compile_standard(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        self._ensure_installed()
        try:
            return solcx.compile_standard(input_data, solc_version=self._version)
        except SolcError as e:
            # solcx raises on error diagnostics; recover the JSON it was given
            if e.stdout_data:
                try:
                    return json.loads(e.stdout_data)
                except ValueError:
                    pass
            raise
