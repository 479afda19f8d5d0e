"""Unit tests for the network spec and security rules."""

import pytest
from pydantic import ValidationError

from topology.errors import TopologyError
from topology.network import (
    ANYWHERE_IPV4,
    COMPUTE_GROUP,
    EDGE_GROUP,
    MIN_EDGE_AZS,
    NetworkSpec,
    SecurityRule,
    rules_for,
    security_rules,
    validate_security_rules,
)


class TestEffectiveAvailabilityZones:
    """The load balancer needs two AZs no matter what is requested."""

    @pytest.mark.parametrize("requested", [0, 1])
    def test_floor_applies_below_two(self, requested):
        assert NetworkSpec(max_azs=requested).effective_azs == MIN_EDGE_AZS == 2

    @pytest.mark.parametrize("requested", [2, 3, 6])
    def test_larger_requests_are_kept(self, requested):
        assert NetworkSpec(max_azs=requested).effective_azs == requested

    def test_negative_is_rejected(self):
        with pytest.raises(ValidationError):
            NetworkSpec(max_azs=-1)

    def test_default_is_cost_optimized_single_az_request(self):
        spec = NetworkSpec()
        assert spec.max_azs == 1
        assert spec.effective_azs == 2
        assert spec.nat_gateways == 0


class TestLayout:
    def test_subnet_cidrs_one_per_az(self):
        spec = NetworkSpec(max_azs=3)
        assert spec.subnet_cidrs() == ["10.0.0.0/24", "10.0.1.0/24", "10.0.2.0/24"]

    def test_invalid_cidr_rejected(self):
        with pytest.raises(ValidationError, match="invalid IPv4 CIDR"):
            NetworkSpec(cidr_block="10.0.0.0/33")

    def test_network_too_small_for_subnets(self):
        with pytest.raises(ValidationError, match="subnets"):
            NetworkSpec(cidr_block="10.0.0.0/24", subnet_cidr_mask=24)

    def test_nat_gateways_bounded_by_subnets(self):
        with pytest.raises(ValidationError, match="nat_gateways"):
            NetworkSpec(max_azs=1, nat_gateways=3)

    def test_spec_is_immutable(self):
        spec = NetworkSpec()
        with pytest.raises(ValidationError):
            spec.max_azs = 4


class TestSecurityRules:
    def test_edge_open_on_80_and_443_only(self):
        edge = rules_for(security_rules(3000), EDGE_GROUP)
        assert sorted(rule.port for rule in edge) == [80, 443]
        assert all(rule.source == ANYWHERE_IPV4 for rule in edge)
        assert all(rule.protocol == "tcp" for rule in edge)

    @pytest.mark.parametrize("port", [80, 3000, 8080, 65535])
    def test_compute_only_reachable_from_edge(self, port):
        compute = rules_for(security_rules(port), COMPUTE_GROUP)
        assert [(rule.source, rule.port) for rule in compute] == [(EDGE_GROUP, port)]

    def test_default_rules_validate(self):
        validate_security_rules(security_rules(3000))

    def test_public_compute_ingress_rejected(self):
        rules = security_rules(3000) + [
            SecurityRule(source=ANYWHERE_IPV4, destination=COMPUTE_GROUP, port=3000)
        ]
        with pytest.raises(TopologyError, match="compute"):
            validate_security_rules(rules)

    def test_extra_edge_port_rejected(self):
        rules = security_rules(3000) + [
            SecurityRule(source=ANYWHERE_IPV4, destination=EDGE_GROUP, port=22)
        ]
        with pytest.raises(TopologyError, match="edge"):
            validate_security_rules(rules)

    def test_missing_https_rejected(self):
        rules = [rule for rule in security_rules(3000) if rule.port != 443]
        with pytest.raises(TopologyError, match="missing"):
            validate_security_rules(rules)
