"""Tests for springprobe.extractors.repositories module."""

from springprobe.extractors import extract_repository_queries
from springprobe.extractors.repositories import scan_query_methods

USER_REPOSITORY = """\
    package com.example.repository;

    public interface UserRepository extends JpaRepository<User, Long> {

        Optional<User> findByEmail(String email);

        @Query("SELECT u FROM User u WHERE u.status = :status AND findMe(x)")
        List<User> findActiveByStatus(@Param("status") String status);

        @Query(value = "select * from users where deleted = false",
               nativeQuery = true)
        List<User> findAllLive();

        long countByCompanyId(Long companyId);

        boolean existsByEmail(String email);

        @Modifying
        void deleteByCreatedAtBefore(LocalDateTime cutoff);

        User save(User user);
    }
"""


class TestExtractRepositoryQueries:
    """Tests for extract_repository_queries."""

    def test_query_methods(self, project) -> None:
        project.add(
            "com/example/repository/UserRepository.java", USER_REPOSITORY
        )

        result = extract_repository_queries(project.root, "UserRepository")
        data = result.to_dict()

        assert data["found"] is True
        assert data["repository"] == "UserRepository"
        assert data["queryMethodCount"] == 6
        assert [
            (m["methodName"], m["returnType"], m["isCustomQuery"])
            for m in data["queryMethods"]
        ] == [
            ("findByEmail", "Optional<User>", False),
            ("findActiveByStatus", "List<User>", True),
            ("findAllLive", "List<User>", True),
            ("countByCompanyId", "long", False),
            ("existsByEmail", "boolean", False),
            ("deleteByCreatedAtBefore", "void", False),
        ]
        native = {
            m["methodName"]: m["nativeQuery"] for m in data["queryMethods"]
        }
        assert native["findAllLive"] is True
        assert native["findActiveByStatus"] is False

    def test_recommendations_without_soft_delete(self, project) -> None:
        project.add(
            "com/example/repository/UserRepository.java", USER_REPOSITORY
        )

        data = extract_repository_queries(
            project.root, "UserRepository"
        ).to_dict()

        assert data["hasSoftDelete"] is False
        assert data["testRecommendation"] == {
            "softDeleteWarning": None,
            "customQueryTests": "Write tests for custom @Query methods",
        }

    def test_soft_delete_filter(self, project) -> None:
        project.add(
            "com/example/repository/InvoiceRepository.java",
            """\
            @Where(clause = "deleted = false")
            public interface InvoiceRepository
                    extends JpaRepository<Invoice, Long> {
                List<Invoice> findByCustomerId(Long customerId);
            }
            """,
        )

        data = extract_repository_queries(
            project.root, "InvoiceRepository"
        ).to_dict()

        assert data["hasSoftDelete"] is True
        assert data["testRecommendation"] == {
            "softDeleteWarning": "⚠️ Always set .deleted(false) in test data",
            "customQueryTests": (
                "Standard Spring Data methods can use template"
            ),
        }

    def test_repository_not_found(self, project) -> None:
        result = extract_repository_queries(project.root, "NopeRepository")
        assert result.to_dict() == {
            "found": False,
            "message": "Repository NopeRepository not found",
        }


class TestScanQueryMethods:
    """Tests for scan_query_methods."""

    def test_return_and_new_are_not_types(self) -> None:
        text = (
            "default List<User> active() {\n"
            "    return findAll(spec);\n"
            "}\n"
        )
        assert scan_query_methods(text) == []

    def test_array_return_type(self) -> None:
        methods = scan_query_methods("String[] findNames();")
        assert [(m.return_type, m.method_name) for m in methods] == [
            ("String[]", "findNames")
        ]
