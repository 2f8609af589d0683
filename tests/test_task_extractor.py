from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from marketplace_agent.extractors.task_extractor import ListingClause, TaskExtractor
from marketplace_agent.models import Marketplace, Priority, TaskStatus


@pytest.fixture
def extractor(id_factory) -> TaskExtractor:
    return TaskExtractor({}, id_factory=id_factory)


def test_single_listing_command_with_urgency_and_date(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("Jarvis, list a red kurti on amazon today and urgent", now)

    assert len(tasks) == 1
    task = tasks[0]
    assert task.title == "Prepare listing for Red Kurti"
    assert task.marketplace == Marketplace.AMAZON
    assert task.priority == Priority.HIGH
    assert task.status == TaskStatus.PENDING
    assert task.due_date == now


def test_each_actionable_clause_becomes_a_task_in_order(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("list shoes and upload bags, add hats", now)

    assert [task.title for task in tasks] == [
        "Prepare listing for Shoes",
        "Prepare listing for Bags",
        "Prepare listing for Hats",
    ]
    assert [task.id for task in tasks] == ["task-1", "task-2", "task-3"]
    assert all(task.marketplace == Marketplace.GENERIC for task in tasks)
    assert all(task.priority == Priority.MEDIUM for task in tasks)
    assert all(task.due_date is None for task in tasks)


def test_clauses_without_action_keywords_are_ignored(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("check stock, then upload bags", now)
    assert [task.title for task in tasks] == ["Prepare listing for Bags"]


def test_explicit_platform_overrides_command_default(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("list shoes on myntra and upload bags on amazon", now)
    assert [task.marketplace for task in tasks] == [Marketplace.MYNTRA, Marketplace.AMAZON]


def test_clause_without_platform_uses_command_default(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("list shoes on flipkart and upload bags", now)
    assert [task.marketplace for task in tasks] == [Marketplace.FLIPKART, Marketplace.FLIPKART]


def test_clause_naming_another_marketplace_overrides_default(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("list shoes on amazon then upload bags to meesho", now)
    assert [task.marketplace for task in tasks] == [Marketplace.AMAZON, Marketplace.MEESHO]
    assert tasks[1].title == "Prepare listing for Bags To Meesho"


def test_all_tasks_share_the_command_due_date(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("list shoes and add hats in 3 days", now)
    assert [task.due_date for task in tasks] == [now + timedelta(days=3)] * 2


def test_missing_product_defaults_to_product_listing(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("list on amazon", now)
    assert tasks[0].title == "Prepare listing for Product Listing"
    assert tasks[0].marketplace == Marketplace.AMAZON


def test_fallback_task_when_nothing_is_actionable(extractor: TaskExtractor, now: datetime) -> None:
    tasks = extractor.extract_tasks("review pending task backlog urgently on Flipkart", now)

    assert len(tasks) == 1
    fallback = tasks[0]
    assert fallback.title == "Review Pending Task Backlog Urgently On Flipkart"
    assert fallback.marketplace == Marketplace.FLIPKART
    assert fallback.priority == Priority.HIGH


def test_configured_defaults_are_used(id_factory, now: datetime) -> None:
    extractor = TaskExtractor(
        {'default_product_name': 'New SKU', 'title_template': 'List {product}'},
        id_factory=id_factory,
    )
    assert extractor.extract_tasks("upload on myntra", now)[0].title == "List New SKU"


def test_parse_clause_reads_verb_article_product_and_platform(extractor: TaskExtractor) -> None:
    parsed = extractor.parse_clause("list a red kurti on amazon today")
    assert parsed == ListingClause(verb="list", product="red kurti", platform=Marketplace.AMAZON)


def test_parse_clause_does_not_mistake_leading_letter_for_article(extractor: TaskExtractor) -> None:
    assert extractor.parse_clause("list apples").product == "apples"
    assert extractor.parse_clause("add the product").product == "product"


def test_parse_clause_keeps_unknown_on_phrases_in_product(extractor: TaskExtractor) -> None:
    parsed = extractor.parse_clause("create an iPhone case on sale")
    assert parsed.product == "iPhone case on sale"
    assert parsed.platform is None


def test_parse_clause_without_action_verb_token(extractor: TaskExtractor) -> None:
    parsed = extractor.parse_clause("playlisting on flipkart")
    assert parsed.verb is None
    assert parsed.product is None
    assert parsed.platform == Marketplace.FLIPKART


def test_parse_clause_drops_trailing_sentence_punctuation(extractor: TaskExtractor) -> None:
    assert extractor.parse_clause("upload silk sarees!").product == "silk sarees"


def test_is_actionable_uses_substring_containment() -> None:
    assert TaskExtractor.is_actionable("listing photos")
    assert not TaskExtractor.is_actionable("check stock")


def test_verbs_inside_longer_words_are_not_read_as_actions(extractor: TaskExtractor, now: datetime) -> None:
    parsed = extractor.parse_clause("relist shoes")
    assert parsed.verb is None
    assert parsed.product is None

    tasks = extractor.extract_tasks("relist shoes", now)
    assert [task.title for task in tasks] == ["Prepare listing for Product Listing"]
