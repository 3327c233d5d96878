"""
Client configuration.

Keys:
    rpc.timeout: total time in seconds a single RPC request may take. Used when a client is created without an
     explicit timeout.
    rpc.seedlist: node urls considered by `NeoRpcClient.from_multiple_nodes()` when no urls are given.
    network.address_version: address version byte used by `neo2.wallet.utils`. `0x17` on MainNet and TestNet.

Example:
    from neo2.settings import settings
    settings.register({"rpc": {"timeout": 5.0, "seedlist": ["http://seed1.neo.org:10332"]}})
"""
import json
from types import SimpleNamespace


class IndexableNamespace(SimpleNamespace):
    def __len__(self):
        return len(self.__dict__)

    def __getitem__(self, key):
        return self.__dict__[key]

    def __contains__(self, key):
        try:
            self.__dict__[key]
            return True
        except KeyError:
            return False

    def get(self, key, default=None):
        try:
            return self.__dict__[key]
        except KeyError:
            return default


class Settings(IndexableNamespace):
    """
    Attribute and key indexable client configuration. Nested dictionaries are exposed as namespaces.
    """

    default_settings = {
        "rpc": {
            "timeout": 3.0,
            "seedlist": [],
        },
        "network": {
            "address_version": 0x17,
        },
    }

    @classmethod
    def from_json(cls, json: dict):
        o = cls(**json)
        o._convert(o.__dict__, o.__dict__)
        return o

    @classmethod
    def from_file(cls, path_to_json: str):
        with open(path_to_json, "r") as f:
            data = json.load(f)
        return cls.from_json(data)

    def register(self, json: dict):
        self.__dict__.update(json)
        self._convert(self.__dict__, self.__dict__)

    def _convert(self, what: dict, where: dict):
        # nested dictionaries become IndexableNamespaces
        to_update = []
        for k, v in what.items():
            if isinstance(v, dict):
                to_update.append((k, IndexableNamespace(**v)))

        for k, v in to_update:
            if isinstance(where, dict):
                where.update({k: v})
            else:
                where.__dict__.update({k: v})
            self._convert(where[k].__dict__, where[k].__dict__)

    def reset_settings_to_default(self):
        self.__dict__.clear()
        self.__dict__.update(self.from_json(self.default_settings).__dict__)


settings = Settings.from_json(Settings.default_settings)
