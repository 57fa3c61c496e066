from upgrader.changes import CodeChangeSet


def _messages(change_set: CodeChangeSet, path: str):
    return [w.message for w in change_set.warnings_for_path(path)]


def test_merge_appends_after_existing_warnings():
    this = CodeChangeSet()
    this.add_warning("p", 1, "w1")
    other = CodeChangeSet()
    other.add_warnings("p", [(2, "w2"), (3, "w3")])

    this.merge_warnings(other)

    assert _messages(this, "p") == ["w1", "w2", "w3"]


def test_merge_adopts_new_paths_in_other_order():
    this = CodeChangeSet()
    this.add_file_change("a", "new", "old")
    other = CodeChangeSet()
    other.add_warning("c", 1, "wc")
    other.add_warning("b", 1, "wb")

    this.merge_warnings(other)

    assert this.affected_files() == ["a", "c", "b"]
    assert _messages(this, "c") == ["wc"]
    assert _messages(this, "b") == ["wb"]


def test_merge_is_not_idempotent():
    """
    Merging the same source twice repeats its warnings.
    """
    this = CodeChangeSet()
    this.add_warning("p", 1, "w1")
    other = CodeChangeSet()
    other.add_warnings("p", [(2, "w2"), (3, "w3")])

    this.merge_warnings(other)
    this.merge_warnings(other)

    assert _messages(this, "p") == ["w1", "w2", "w3", "w2", "w3"]
    assert this.affected_files() == ["p"]


def test_merge_ignores_changes_and_leaves_other_untouched():
    this = CodeChangeSet()
    other = CodeChangeSet()
    other.add_file_change("changed", "new", "old")
    other.add_warning("warned", 4, "careful")

    this.merge_warnings(other)
    # Mutating the adopted list must not leak back into `other`.
    this.add_warning("warned", 5, "more")

    assert this.all_changes() == {}
    assert this.affected_files() == ["warned"]
    assert _messages(other, "warned") == ["careful"]
    assert other.affected_files() == ["changed", "warned"]


def test_merge_registers_adopted_path_already_affected_by_a_change():
    this = CodeChangeSet()
    this.add_file_change("p", "new", "old")
    other = CodeChangeSet()
    other.add_warning("p", 1, "w")

    this.merge_warnings(other)

    assert this.affected_files() == ["p"]
    assert this.has_warnings("p")
    assert this.ops_by_path("p") == "modified"
