"""Tests for springprobe.extractors.entities module."""

import pytest

from springprobe.extractors import extract_entity_relationships
from springprobe.extractors.entities import is_required, scan_relationships

ORDER = """\
    package com.example.entity;

    @Entity
    @Table(name = "orders")
    public class Order extends BaseEntity {

        @ManyToOne(fetch = FetchType.LAZY)
        @JoinColumn(name = "customer_id", nullable = false)
        private Customer customer;

        @ManyToOne
        @JoinColumn(name = "coupon_id", nullable = true)
        private Coupon coupon;

        @ManyToOne
        private Warehouse warehouse;

        // @ManyToOne private Ghost ghost;

        @OneToMany(mappedBy = "order", cascade = CascadeType.ALL)
        private List<OrderItem> items = new ArrayList<>();

        @OneToOne(mappedBy = "order")
        private Invoice invoice;

        @ManyToMany
        private Set<Tag> tags;
    }
"""


class TestExtractEntityRelationships:
    """Tests for extract_entity_relationships."""

    @pytest.fixture
    def graph(self, project):
        project.add("com/example/entity/Order.java", ORDER)
        project.add(
            "com/example/entity/OrderItem.java",
            "public class OrderItem { @ManyToOne private Order order; }",
        )
        return extract_entity_relationships(project.root, "Order").to_dict()

    def test_many_to_one_with_required(self, graph) -> None:
        assert graph["relationships"]["manyToOne"] == [
            {"type": "Customer", "field": "customer", "required": True},
            {"type": "Coupon", "field": "coupon", "required": False},
            {"type": "Warehouse", "field": "warehouse", "required": True},
        ]

    def test_collections_and_one_to_one(self, graph) -> None:
        rels = graph["relationships"]
        assert rels["oneToMany"] == [{"type": "OrderItem", "field": "items"}]
        assert rels["oneToOne"] == [{"type": "Invoice", "field": "invoice"}]
        assert rels["manyToMany"] == [{"type": "Tag", "field": "tags"}]

    def test_inheritance_and_no_discriminator(self, graph) -> None:
        assert graph["found"] is True
        assert graph["entity"] == "Order"
        assert graph["inheritance"] == "BaseEntity"
        assert graph["discriminator"] is False
        assert graph["warning"] is None

    def test_creation_order(self, graph) -> None:
        assert graph["creationOrder"] == [
            "1. Create Customer first (required dependency)",
            "1. Create Coupon first (required dependency)",
            "1. Create Warehouse first (required dependency)",
            "2. Create Order",
            "3. Create OrderItem (children)",
        ]

    def test_discriminator_warning(self, project) -> None:
        project.add(
            "com/example/entity/Payment.java",
            """\
            @Entity
            @Inheritance(strategy = InheritanceType.SINGLE_TABLE)
            @DiscriminatorColumn(name = "payment_type")
            public abstract class Payment {
                @Id
                private Long id;
            }
            """,
        )

        graph = extract_entity_relationships(project.root, "Payment")

        assert graph.discriminator is True
        assert graph.inheritance is None
        assert graph.warning == (
            "⚠️ This entity uses inheritance - use specific subclass, not "
            "base Payment class"
        )
        assert graph.creation_order == ["2. Create Payment"]

    def test_entity_not_found(self, project) -> None:
        result = extract_entity_relationships(project.root, "Missing")
        assert result.to_dict() == {
            "found": False,
            "message": "Entity Missing not found",
        }


class TestIsRequired:
    """Tests for the nullability heuristic."""

    @pytest.mark.parametrize(
        ("span", "expected"),
        [
            ('@JoinColumn(name = "a", nullable = false)', True),
            ("", True),
            ('@JoinColumn(name = "a", nullable = true)', False),
            ("(optional = true)", False),
            ("(optional=false)", True),
        ],
    )
    def test_span(self, span: str, expected: bool) -> None:
        assert is_required(span) is expected


class TestScanRelationships:
    """Tests for scan_relationships."""

    def test_every_kind_present_even_when_empty(self) -> None:
        rels = scan_relationships("public class Plain {}")
        assert rels == {
            "manyToOne": [],
            "oneToMany": [],
            "oneToOne": [],
            "manyToMany": [],
        }

    def test_span_does_not_cross_relationships(self) -> None:
        text = (
            "@ManyToOne\n"
            "@JoinColumn(nullable = false)\n"
            "private Author author;\n"
            "@ManyToOne(optional = true)\n"
            "protected Editor editor;\n"
        )
        rels = scan_relationships(text)["manyToOne"]
        assert [(r.type, r.required) for r in rels] == [
            ("Author", True),
            ("Editor", False),
        ]

    def test_package_private_field(self) -> None:
        text = (
            "@ManyToOne(fetch = FetchType.LAZY)\n"
            "Company company;\n"
            "private String name;\n"
            "@OneToMany(mappedBy = \"company\")\n"
            "final Set<Employee> staff = new HashSet<>();\n"
        )
        rels = scan_relationships(text)
        assert [(r.type, r.field) for r in rels["manyToOne"]] == [
            ("Company", "company")
        ]
        assert [(r.type, r.field) for r in rels["oneToMany"]] == [
            ("Employee", "staff")
        ]

    def test_field_without_modifier_is_not_skipped(self) -> None:
        text = (
            "@ManyToOne\n"
            "Company company;\n"
            "private Address address;\n"
        )
        rels = scan_relationships(text)["manyToOne"]
        assert [r.field for r in rels] == ["company"]
