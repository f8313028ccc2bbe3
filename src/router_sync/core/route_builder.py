from typing import Dict, Iterable, List

from router_sync.core.container_record import ContainerRecord
from router_sync.core.route_config import RouteConfig
from router_sync.core.route_intent import RouteIntent
from router_sync.logger import logger


def get_container_route_intents(
	record: ContainerRecord,
	suffixes: List[str],
	host_ip: str,
	slug_label: str,
) -> List[RouteIntent]:
	if not record.has_slug_label(slug_label):
		return []

	slugs = record.slugs(slug_label)
	if not slugs:
		logger.debug(f"[route_builder] Container {record.name} has an empty {slug_label} label, skipping")
		return []

	port = record.public_port
	if port is None:
		logger.warning(
			f"[route_builder] Container {record.name} with slug(s) '{', '.join(slugs)}' found but has no mapped ports."
		)
		return []

	backend = f"{host_ip}:{port}"
	return [
		RouteIntent(slug=slug, backend=backend, suffixes=list(suffixes), source="docker")
		for slug in slugs
	]


def get_manual_route_intents(config: RouteConfig) -> List[RouteIntent]:
	route_intents: List[RouteIntent] = []
	for slug, entry in config.manual.items():
		if entry.override_suffix:
			# Override suffixes may carry complete addresses (see RouteIntent.route_name)
			route_intents.append(
				RouteIntent(
					slug=slug,
					backend=entry.backend,
					suffixes=list(entry.override_suffix),
					source="manual",
					allow_full_domain=True,
				)
			)
		else:
			route_intents.append(
				RouteIntent(
					slug=slug,
					backend=entry.backend,
					suffixes=list(config.default_domain_suffix),
					source="manual",
				)
			)
	return route_intents


def build_desired_routes(intents: Iterable[RouteIntent]) -> Dict[str, str]:
	"""
	Expand intents into a route name -> backend mapping.

	Later intents overwrite earlier ones for the same route name.
	"""
	desired: Dict[str, str] = {}
	for intent in intents:
		for route_name in intent.route_names():
			previous = desired.get(route_name)
			if previous is not None and previous != intent.backend:
				logger.debug(
					f"[route_builder] {route_name} -> {previous} overridden by {intent.source} slug '{intent.slug}' -> {intent.backend}"
				)
			desired[route_name] = intent.backend
	return desired


def get_desired_routes(
	config: RouteConfig,
	records: Iterable[ContainerRecord],
	host_ip: str,
	slug_label: str,
) -> Dict[str, str]:
	intents: List[RouteIntent] = []
	for record in records:
		intents.extend(
			get_container_route_intents(
				record,
				suffixes=config.default_domain_suffix,
				host_ip=host_ip,
				slug_label=slug_label,
			)
		)
	# Manual entries go last so they win over discovered containers
	intents.extend(get_manual_route_intents(config))
	return build_desired_routes(intents)
