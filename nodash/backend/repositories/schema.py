"""
Notes Schema.

DDL for the notes table and its full-text index. Every statement is
idempotent and issued on its own, so the same list works for backends
that only accept one statement per call.

``notes_fts`` is a denormalised copy of title and content for
non-archived notes, keyed by the note's rowid. The trigram tokenizer
gives case-insensitive substring matching. Triggers keep it in step
with ``notes``.
"""

SCHEMA_STATEMENTS: list[str] = [
    """
    create table if not exists "notes" (
        "id" text primary key,
        "title" text not null,
        "content" text not null default '',
        "created_at" text not null,
        "updated_at" text not null,
        "archived" integer not null default 0 check ("archived" in (0, 1)),
        check ("updated_at" >= "created_at")
    )
    """,
    """
    create index if not exists "idx_notes_title" on "notes"("title")
    """,
    """
    create index if not exists "idx_notes_archived" on "notes"("archived")
    """,
    """
    create index if not exists "idx_notes_updated_at" on "notes"("updated_at" desc)
    """,
    """
    create virtual table if not exists "notes_fts" using fts5(
        "title",
        "content",
        tokenize = 'trigram'
    )
    """,
    """
    create trigger if not exists "notes_fts_insert"
    after insert on "notes" begin
        insert into "notes_fts"("rowid", "title", "content")
        select "new"."rowid", "new"."title", "new"."content"
        where "new"."archived" = 0;
    end
    """,
    """
    create trigger if not exists "notes_fts_update"
    after update on "notes" begin
        delete from "notes_fts" where "rowid" = "old"."rowid";
        insert into "notes_fts"("rowid", "title", "content")
        select "new"."rowid", "new"."title", "new"."content"
        where "new"."archived" = 0;
    end
    """,
    """
    create trigger if not exists "notes_fts_delete"
    after delete on "notes" begin
        delete from "notes_fts" where "rowid" = "old"."rowid";
    end
    """,
]
