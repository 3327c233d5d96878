"""
NEO 2 RPC Node client and response classes.
"""
from __future__ import annotations
import aiohttp
import asyncio
import urllib.parse
from contextlib import suppress
from dataclasses import dataclass
from typing import Optional, Any, Union
from neo2 import rpc_logger as logger, settings


@dataclass
class Witness:
    """
    Invocation and verification script pair, hex encoded.
    """

    invocation: str
    verification: str

    @classmethod
    def from_json(cls, json: dict):
        return cls(json["invocation"], json["verification"])


@dataclass
class TransactionAttribute:
    usage: str
    data: str

    @classmethod
    def from_json(cls, json: dict):
        return cls(json["usage"], json["data"])


@dataclass
class Vin:
    """
    Reference to an output of a previous transaction that is being spent.
    """

    txid: str
    vout: int

    @classmethod
    def from_json(cls, json: dict):
        return cls(json["txid"], json["vout"])


@dataclass
class Vout:
    """
    Transaction output. Also the response to the `gettxout` RPC call.

    The value is kept as returned by the node to avoid precision loss.
    """

    n: int
    asset: str
    value: str
    address: str

    @classmethod
    def from_json(cls, json: dict):
        return cls(json["n"], json["asset"], json["value"], json["address"])


@dataclass
class Transaction:
    """
    Response to the verbose `getrawtransaction` RPC call.

    `blockhash`, `confirmations` and `blocktime` are only present once the transaction is included in a block and
    when the transaction is not nested in a `Block` response.
    """

    txid: str
    size: int
    type: str
    version: int
    attributes: list[TransactionAttribute]
    vin: list[Vin]
    vout: list[Vout]
    sys_fee: str
    net_fee: str
    scripts: list[Witness]
    blockhash: Optional[str] = None
    confirmations: Optional[int] = None
    blocktime: Optional[int] = None

    @classmethod
    def from_json(cls, json: dict):
        return cls(
            json["txid"],
            json["size"],
            json["type"],
            json["version"],
            list(map(TransactionAttribute.from_json, json["attributes"])),
            list(map(Vin.from_json, json["vin"])),
            list(map(Vout.from_json, json["vout"])),
            json["sys_fee"],
            json["net_fee"],
            list(map(Witness.from_json, json["scripts"])),
            json.get("blockhash", None),
            json.get("confirmations", None),
            json.get("blocktime", None),
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(txid={self.txid}, type={self.type})"


@dataclass
class Block:
    """
    Response to the verbose `getblock` RPC call.
    """

    hash: str
    size: int
    version: int
    previous_block_hash: str
    merkle_root: str
    time: int
    index: int
    nonce: str
    next_consensus: str
    script: Witness
    tx: list[Transaction]
    confirmations: Optional[int] = None
    next_block_hash: Optional[str] = None

    @classmethod
    def from_json(cls, json: dict):
        return cls(
            json["hash"],
            json["size"],
            json["version"],
            json["previousblockhash"],
            json["merkleroot"],
            json["time"],
            json["index"],
            json["nonce"],
            json["nextconsensus"],
            Witness.from_json(json["script"]),
            list(map(Transaction.from_json, json["tx"])),
            json.get("confirmations", None),
            json.get("nextblockhash", None),
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(index={self.index}, hash={self.hash}, tx_count={len(self.tx)})"


@dataclass
class Balance:
    """
    Response to `getbalance` RPC call.
    """

    balance: str
    confirmed: str

    @classmethod
    def from_json(cls, json: dict):
        return cls(json["balance"], json["confirmed"])


def build_request(
    method: str,
    params: Optional[list] = None,
    id: int = 1,
    jsonrpc_version: str = "2.0",
) -> dict:
    """
    Create a JSON-RPC request body.

    Args:
        method: RPC method name.
        params: positional parameters. Sent as an empty list if not supplied.
        id: request identifier.
        jsonrpc_version: protocol version.
    """
    return {
        "jsonrpc": jsonrpc_version,
        "id": id,
        "method": method,
        "params": params if params else [],
    }


class RPCClient:
    """
    RPC Client base.
    """

    def __init__(self, url: str, timeout: Optional[float] = None):
        """
        Args:
            url: scheme + host + port.
            timeout: total time in seconds a request may take. Defaults to `settings.rpc.timeout`.
        """
        self.url = url
        self.timeout = settings.settings.rpc.timeout if timeout is None else timeout
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )

    async def _post(self, json: dict, url: Optional[str] = None):
        """
        Create a POST request with JSON to `url` (defaults to `self.url`) with `self.timeout`.

        Raises:
            HttpStatusError: if the server does not respond with status 200.
            aiohttp.ClientError: on transport failures.
            asyncio.exceptions.TimeoutError
            ValueError: if the response body is not valid JSON.
        """
        url = self.url if url is None else url
        async with self.session.post(url, json=json) as response:
            if response.status != 200:
                raise HttpStatusError(response.status)
            return await response.json(content_type=None)

    async def close(self):
        """
        Close the client session.
        """
        await self.session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if not self.session.closed:
            await self.session.close()


class JsonRpcError(Exception):
    def __init__(self, code: int, message: str, data: Optional[Any] = None):
        super(JsonRpcError, self).__init__(message)
        self.code = code
        self.message = message
        self.data = "" if data is None else str(data)

    def __str__(self):
        if len(self.data) > 0:
            return f"code={self.code}, message={self.message}, data={self.data}"
        else:
            return f"code={self.code}, message={self.message}"


class HttpStatusError(Exception):
    def __init__(self, status: int):
        super(HttpStatusError, self).__init__(
            f"non-200 status code returned from NEO node, got: '{status}'"
        )
        self.status = status


class NoNodeAvailableError(Exception):
    def __init__(self, message: str = "Unable to communicate with any nodes"):
        super(NoNodeAvailableError, self).__init__(message)


_DEFAULT_PORTS = {"http": 80, "https": 443}


class NeoRpcClient(RPCClient):
    """
    Specialised RPC client for the NEO 2 Node RPC API.

    Calls that require an open wallet on the node are marked as such.
    """

    def __init__(self, url: str, **kwargs):
        super(NeoRpcClient, self).__init__(url, **kwargs)
        #: candidate nodes for `select_best_node`
        self.urls = [url]

    @classmethod
    async def from_multiple_nodes(
        cls, urls: Optional[list[str]] = None, **kwargs
    ) -> NeoRpcClient:
        """
        Create a client that uses the node reporting the highest block count.

        Args:
            urls: candidate node urls. Defaults to `settings.rpc.seedlist`.
            kwargs: passed on to the client constructor.

        Raises:
            ValueError: if no urls are supplied.
            NoNodeAvailableError: if none of the nodes could be queried.
        """
        if urls is None:
            urls = list(settings.settings.rpc.seedlist)
        if len(urls) == 0:
            raise ValueError("Length of 'urls' argument must be greater than 0")

        client = cls(urls[0], **kwargs)
        client.urls = list(urls)
        try:
            await client.select_best_node()
        except BaseException:
            # includes cancellation from an outer timeout
            await client.close()
            raise
        return client

    async def _do_post(
        self,
        method: str,
        params: Optional[list] = None,
        id: int = 1,
        jsonrpc_version: str = "2.0",
        url: Optional[str] = None,
    ):
        json = build_request(method, params, id, jsonrpc_version)
        logger.debug(
            f"{method} request to {self.url if url is None else url} with params={json['params']}"
        )
        response = await super(NeoRpcClient, self)._post(json, url)
        if not isinstance(response, dict):
            raise ValueError(f"Malformed JSON-RPC response: {response}")
        error = response.get("error", None)
        # nodes can return an error object without a message, which does not signal a failure
        if isinstance(error, dict) and error.get("message", ""):
            raise JsonRpcError(error.get("code", 0), error["message"], error.get("data", None))
        if "result" not in response:
            raise ValueError(f"JSON-RPC response holds neither a result nor an error message: {response}")
        return response["result"]

    async def select_best_node(self) -> str:
        """
        Select the node with the highest block count from `self.urls` and make it the node used for calls.

        With only one candidate it is selected without querying it. Otherwise all candidates are queried in order
        and nodes that fail to respond are skipped. On a tie the first node wins.

        Returns:
            the selected url.

        Raises:
            NoNodeAvailableError: if none of the nodes reported a block count.
        """
        if len(self.urls) == 1:
            self.url = self.urls[0]
            return self.url

        best_url = None
        highest_block = 0
        for url in self.urls:
            try:
                block_count = await self._do_post("getblockcount", url=url)
            except (
                aiohttp.ClientError,
                asyncio.TimeoutError,
                HttpStatusError,
                JsonRpcError,
                ValueError,
            ) as e:
                logger.debug(f"Skipping node {url}: {e!r}")
                continue

            logger.debug(f"Node {url} reports block count {block_count}")
            if isinstance(block_count, int) and block_count > highest_block:
                highest_block = block_count
                best_url = url

        if best_url is None:
            raise NoNodeAvailableError()

        logger.debug(f"Selected node {best_url} at block count {highest_block}")
        self.url = best_url
        return best_url

    async def ping(self) -> bool:
        """
        Check if the node accepts TCP connections. Does not perform an RPC call.
        """
        parsed = urllib.parse.urlsplit(self.url)
        try:
            port = parsed.port or _DEFAULT_PORTS.get(parsed.scheme, None)
        except ValueError:
            return False
        if parsed.hostname is None or port is None:
            return False

        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(parsed.hostname, port), self.timeout
            )
        except (OSError, ValueError, asyncio.TimeoutError):
            # ValueError covers host names that cannot be IDNA encoded
            return False

        writer.close()
        with suppress(OSError):
            await writer.wait_closed()
        return True

    async def get_best_block_hash(self) -> str:
        """
        Fetch the hash of the highest block in the chain.
        """
        return await self._do_post("getbestblockhash")

    async def get_block_by_hash(self, block_hash: str) -> Block:
        """
        Fetch the block by its hash.
        """
        result = await self._do_post("getblock", [block_hash, 1])
        return Block.from_json(result)

    async def get_block_by_index(self, index: int) -> Block:
        """
        Fetch the block by its index.
        """
        result = await self._do_post("getblock", [index, 1])
        return Block.from_json(result)

    async def get_block_count(self) -> int:
        """
        Fetch the current number of blocks in the chain.
        """
        return await self._do_post("getblockcount")

    async def get_block_hash(self, index: int) -> str:
        """
        Fetch the block hash by the block's index.
        """
        return await self._do_post("getblockhash", [index])

    async def get_connection_count(self) -> int:
        """
        Fetch the number of peers connected to the node.
        """
        return await self._do_post("getconnectioncount")

    async def get_storage(self, script_hash: str, key: Union[bytes, str]) -> str:
        """
        Fetch a value from a smart contracts storage by its key.

        Args:
            script_hash: contract script hash.
            key: the storage key to fetch the data for. A `str` key is UTF-8 encoded.

        Returns:
            the hex encoded value, or an empty string if the key does not exist.

        Example:
            await client.get_storage("0x5b7074e873973a6ed3708862f219a6fbf4d1c411", "totalSupply")
        """
        if isinstance(key, str):
            key = key.encode()
        result = await self._do_post("getstorage", [script_hash, key.hex()])
        return "" if result is None else result

    async def get_transaction(self, tx_hash: str) -> Transaction:
        """
        Fetch a transaction by its hash.
        """
        result = await self._do_post("getrawtransaction", [tx_hash, 1])
        return Transaction.from_json(result)

    async def get_transaction_output(self, tx_hash: str, index: int) -> Vout:
        """
        Fetch an unspent transaction output.

        Args:
            tx_hash: the hash of the transaction holding the output.
            index: the position of the output in the transaction.
        """
        result = await self._do_post("gettxout", [tx_hash, index])
        return Vout.from_json(result)

    async def get_unconfirmed_transactions(self) -> list[str]:
        """
        Fetch the hashes of the transactions in the memory pool of the node.
        """
        return await self._do_post("getrawmempool")

    async def validate_address(self, address: str) -> bool:
        """
        Verify if the given address is valid for the network the node is running on.

        Args:
            address: a NEO address.
        """
        result = await self._do_post("validateaddress", [address])
        if not isinstance(result, dict):
            return False
        returned_address = result.get("address", None)
        valid = result.get("isvalid", None)
        if not isinstance(returned_address, str) or not isinstance(valid, bool):
            return False
        return returned_address == address and valid

    async def get_balance(self, asset_id: str) -> Balance:
        """
        Fetch the balance of an asset in the wallet opened on the node.

        Note:
            Requires an open wallet on the node.

        Args:
            asset_id: the hash of the asset e.g. NEO or GAS.
        """
        result = await self._do_post("getbalance", [asset_id])
        return Balance.from_json(result)

    async def get_new_address(self) -> str:
        """
        Create a new address in the wallet opened on the node.

        Note:
            Requires an open wallet on the node.
        """
        return await self._do_post("getnewaddress")

    async def send_to_address(
        self, asset_id: str, address: str, amount: Union[int, float, str]
    ) -> str:
        """
        Transfer an asset from the wallet opened on the node to `address`.

        Note:
            Requires an open wallet on the node.

        Args:
            asset_id: the hash of the asset to transfer.
            address: the destination address.
            amount: amount to transfer.

        Returns:
            the hash of the transaction.
        """
        result = await self._do_post("sendtoaddress", [asset_id, address, amount])
        return result["txid"]
