"""
Chain-specific configuration for dexscout.

Each supported network is described by a ChainDeployment record holding the
addresses every query needs (quote asset, Uniswap factories and router,
Multicall3). Records are looked up by chain id through a DeploymentRegistry,
so adding a network is a data change.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from web3 import Web3

from .base import BaseConfig, ConfigurationError

# Multicall3 is deployed at the same address on every supported chain
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"


@dataclass(frozen=True)
class ChainDeployment:
    """
    Contract addresses for one network.

    Attributes:
        chain_id: EIP-155 chain id
        name: Short chain name used by the CLI and RPC lookup
        quote_asset: Wrapped native token used as the pricing denominator
        v2_factory: Uniswap V2 factory
        v2_router: Uniswap V2 router (getAmountOut is pure, any router works)
        v3_factory: Uniswap V3 factory
        multicall: Multicall3 contract used for batched reads
        v2_deployment_block: First block worth scanning for V2 pairs
        v3_deployment_block: First block worth scanning for V3 pools
    """

    chain_id: int
    name: str
    quote_asset: str
    v2_factory: str
    v2_router: str
    v3_factory: str
    multicall: str = MULTICALL3_ADDRESS
    v2_deployment_block: int = 0
    v3_deployment_block: int = 0

    def __post_init__(self):
        # Normalise every address field to checksum form
        for name in ("quote_asset", "v2_factory", "v2_router", "v3_factory", "multicall"):
            object.__setattr__(self, name, Web3.to_checksum_address(getattr(self, name)))


ETHEREUM = ChainDeployment(
    chain_id=1,
    name="ethereum",
    quote_asset="0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
    v2_factory="0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f",
    v2_router="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
    v3_factory="0x1F98431c8aD98523631AE4a59f267346ea31F984",
    v2_deployment_block=10000835,
    v3_deployment_block=12369621,
)

SEPOLIA = ChainDeployment(
    chain_id=11155111,
    name="sepolia",
    quote_asset="0xfFf9976782d46CC05630D1f6eBAb18b2324d6B14",
    v2_factory="0x7E0987E5b3a30e3f2828572Bb659A548460a3003",
    v2_router="0xeE567Fe1712Faf6149d80dA1E6934E354124CfE3",
    v3_factory="0x0227628f3F023bb0B980b67D528571c95c6DaC1c",
)


class DeploymentRegistry:
    """Chain id -> ChainDeployment lookup. Unknown ids are a hard error."""

    def __init__(self, deployments: Iterable[ChainDeployment] = (ETHEREUM, SEPOLIA)):
        self._deployments: Dict[int, ChainDeployment] = {}
        for deployment in deployments:
            self.register(deployment)

    def register(self, deployment: ChainDeployment) -> None:
        self._deployments[deployment.chain_id] = deployment

    def get(self, chain_id: int) -> ChainDeployment:
        try:
            return self._deployments[int(chain_id)]
        except KeyError:
            raise ConfigurationError(f"Unsupported chain id: {chain_id}", chain_id=chain_id)

    def by_name(self, name: str) -> ChainDeployment:
        for deployment in self._deployments.values():
            if deployment.name == name.lower():
                return deployment
        raise ConfigurationError(f"Unsupported chain: {name}")

    @property
    def chain_ids(self) -> List[int]:
        return sorted(self._deployments)


@dataclass
class ChainConfig(BaseConfig):
    """RPC endpoints and deployment registry for supported chains."""

    DEFAULT_CHAIN: str = BaseConfig.get_env("DEFAULT_CHAIN", "ethereum")

    # Chain-specific RPC URLs
    ETHEREUM_RPC_URL: str = BaseConfig.get_env(
        "ETHEREUM_RPC_URL", "https://eth.llamarpc.com"
    )
    SEPOLIA_RPC_URL: str = BaseConfig.get_env(
        "SEPOLIA_RPC_URL", "https://ethereum-sepolia-rpc.publicnode.com"
    )

    registry: DeploymentRegistry = field(default_factory=DeploymentRegistry)

    @property
    def rpc_urls(self) -> Dict[str, str]:
        return {
            "ethereum": self.ETHEREUM_RPC_URL,
            "sepolia": self.SEPOLIA_RPC_URL,
        }

    def get_deployment(self, chain_id: int) -> ChainDeployment:
        """Get the deployment record for a chain id."""
        return self.registry.get(chain_id)

    def get_rpc_url(self, chain_name: Optional[str] = None) -> str:
        """Get RPC URL for a chain, defaulting to DEFAULT_CHAIN."""
        chain_name = (chain_name or self.DEFAULT_CHAIN).lower()
        if chain_name not in self.rpc_urls:
            raise ConfigurationError(f"Unsupported chain: {chain_name}")
        return self.rpc_urls[chain_name]
