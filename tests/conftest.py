"""Shared test fixtures for dtsgen."""

import json

import pytest

from dtsgen.config.models import DtsConfig


COMMENTS_SOURCE = """\
import type { Comment, Unused } from './types'
import { helper } from './helper'

export interface CommentsResponse {
  comments: Comment[]
}

/**
 * Fetch comments for a post
 */
export async function fetchComments(postId: number): Promise<CommentsResponse> {
  const res = await helper(`/posts/${postId}/comments`)
  return res.json()
}

export const defaultHeaders = {
  'Content-Type': 'application/json',
}

const secret = 'not exported'
"""

COMMENTS_DTS = """\
import type { Comment } from './types'

export declare interface CommentsResponse {
  comments: Comment[]
}
/**
 * Fetch comments for a post
 */
export declare function fetchComments(postId: number): Promise<CommentsResponse>;
export declare const defaultHeaders: {
  'Content-Type': 'application/json';
};
"""


@pytest.fixture
def sample_config():
    return DtsConfig()


def write_tsconfig(path, isolated=True, **extra):
    options = {"strict": True}
    if isolated is not None:
        options["isolatedDeclarations"] = isolated
    path.write_text(json.dumps({"compilerOptions": options, **extra}, indent=2))
    return path


@pytest.fixture
def ts_project(tmp_path):
    """A small TypeScript project with a tsconfig enabling isolatedDeclarations."""
    write_tsconfig(tmp_path / "tsconfig.json", include=["src/**/*.ts"])

    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    (src / "index.ts").write_text(COMMENTS_SOURCE)
    (src / "nested" / "util.ts").write_text(
        "export function add(a: number, b: number = 2): number {\n  return a + b\n}\n"
    )
    (src / "empty.ts").write_text("const local = 1\nconsole.log(local)\n")
    (src / "types.d.ts").write_text("export interface Comment { id: number }\n")
    return tmp_path


@pytest.fixture
def project_config(ts_project):
    return DtsConfig(
        root=str(ts_project / "src"),
        outdir=str(ts_project / "dist"),
        tsconfig_path=str(ts_project / "tsconfig.json"),
    )
