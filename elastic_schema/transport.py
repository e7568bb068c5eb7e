"""
Sending definitions and searches to the Elastic server.

The definitions and nodes never talk to the server themselves. Anything that implements the Transport
protocol can be used, ElasticTransport is the implementation based on the elasticsearch client.
The connection is configured with the elastic_* settings, see config.py
"""

import logging
from typing import Any, Mapping, Protocol

from elasticsearch import Elasticsearch

from elastic_schema.config import Settings, get_settings
from elastic_schema.definition import Definition
from elastic_schema.errors import ConfigurationError
from elastic_schema.formatters import Formatter
from elastic_schema.nodes.search import Search
from elastic_schema.results import SearchResult


class CannotConnectElastic(Exception):
    pass


class SearchFailed(Exception):
    pass


class Transport(Protocol):
    def create_index(self, index: str, mapping: Mapping[str, Any]) -> None: ...

    def put_mapping(self, index: str, mapping: Mapping[str, Any]) -> None: ...

    def search(self, index: str, body: Mapping[str, Any]) -> Mapping[str, Any]: ...


def connect_elastic(settings: Settings | None = None) -> Elasticsearch:
    """
    Connect to the elastic server using the system settings
    """
    settings = settings or get_settings()
    if settings.elastic_password:
        return Elasticsearch(
            settings.elastic_host,
            basic_auth=("elastic", settings.elastic_password),
            verify_certs=bool(settings.elastic_verify_ssl),
        )
    else:
        return Elasticsearch(settings.elastic_host or None)


class ElasticTransport:
    def __init__(self, client: Elasticsearch | None = None, settings: Settings | None = None):
        self._client = client
        self._settings = settings

    @property
    def client(self) -> Elasticsearch:
        if self._client is None:
            settings = self._settings or get_settings()
            logging.debug(
                f"Connecting with elasticsearch at {settings.elastic_host}, "
                f"password? {'yes' if settings.elastic_password else 'no'} "
            )
            client = connect_elastic(settings)
            if not client.ping():
                raise CannotConnectElastic(f"Cannot connect to elasticsearch server {settings.elastic_host}")
            self._client = client
        return self._client

    def create_index(self, index: str, mapping: Mapping[str, Any]) -> None:
        logging.info(f"Creating index {index}")
        self.client.indices.create(index=index, mappings=dict(mapping))

    def put_mapping(self, index: str, mapping: Mapping[str, Any]) -> None:
        logging.info(f"Updating mapping of index {index}")
        self.client.indices.put_mapping(index=index, properties=dict(mapping["properties"]))

    def search(self, index: str, body: Mapping[str, Any]) -> Mapping[str, Any]:
        kargs = dict(body)
        if "_source" in kargs:
            kargs["source"] = kargs.pop("_source")
        logging.debug(f"Searching {index}: {kargs}")
        response = self.client.search(index=index, **kargs)
        return getattr(response, "body", response)


def _frozen_mapping(definition: Definition) -> dict:
    if not definition.frozen:
        raise ConfigurationError("Definition should be frozen before it is sent to the server")
    return definition.as_es_mapping()


def create_index(transport: Transport, index: str, definition: Definition) -> None:
    transport.create_index(index, _frozen_mapping(definition))


def update_mapping(transport: Transport, index: str, definition: Definition) -> None:
    transport.put_mapping(index, _frozen_mapping(definition))


def run_search(transport: Transport, index: str, search: Search, formatter: Formatter) -> SearchResult:
    """Render the search, send it to the server and decode the response"""
    response = transport.search(index, search.render())
    if failure := response.get("_shards", {}).get("failures"):
        raise SearchFailed(f"Error on running search: {failure}")
    return search.handle_result(response, formatter)
