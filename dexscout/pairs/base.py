"""
Shared plumbing for the Uniswap clients: deployment lookup and per-stage
batcher creation.
"""

import logging
from typing import Optional

from web3 import AsyncWeb3

from ..batchers.base import BatchConfig, MulticallBatcher
from ..batchers.errors import TransportError, ValidationError
from ..config.chains import ChainDeployment, DeploymentRegistry

logger = logging.getLogger(__name__)


class BaseDexClient:
    """
    Base class for clients that read DEX contracts through Multicall3.

    When chain_id is given the deployment is resolved immediately, so an
    unsupported chain fails with ConfigurationError before any network call.
    Otherwise the chain id is read from the provider on first use.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        chain_id: Optional[int] = None,
        registry: Optional[DeploymentRegistry] = None,
        batch_config: Optional[BatchConfig] = None,
    ):
        self.web3 = web3
        self.registry = registry or DeploymentRegistry()
        self.batch_config = batch_config or BatchConfig()
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

        self._deployment: Optional[ChainDeployment] = None
        if chain_id is not None:
            self._deployment = self.registry.get(chain_id)

    async def get_deployment(self) -> ChainDeployment:
        """Deployment for the provider's chain; ConfigurationError if unknown."""
        if self._deployment is None:
            try:
                chain_id = await self.web3.eth.chain_id
            except Exception as e:
                raise TransportError(f"Failed to get chain id: {e}", cause=e) from e
            self._deployment = self.registry.get(chain_id)
        return self._deployment

    def new_batcher(self, deployment: ChainDeployment) -> MulticallBatcher:
        """A fresh batcher for one pipeline stage."""
        return MulticallBatcher(self.web3, deployment.multicall, self.batch_config)

    def stage_batcher(
        self, deployment: ChainDeployment, batcher: Optional[MulticallBatcher] = None
    ) -> MulticallBatcher:
        """
        The caller's batcher if given, otherwise a new one.

        A caller's batcher must be empty: results are matched to inputs by
        position, so leftover calls would shift every slot.
        """
        if batcher is None:
            return self.new_batcher(deployment)
        if len(batcher):
            raise ValidationError(f"Batcher already holds {len(batcher)} pending calls")
        return batcher
