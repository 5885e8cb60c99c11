"""Shared pytest fixtures: small C projects on disk."""

from pathlib import Path

import pytest
from cdok import Project, Settings

from tests.helpers import write_project

MATH_C = """\
#include <stdio.h>
#include "math.h"

static int helper(int x);

int add(int a, int b)
{
    return a + b;
}

static void *make_buf(size_t n) {
    return malloc(n);
}

void print_values(const char *label, int count, double values[])
{
    printf("%s", label);
}
"""

MATH_H = """\
#ifndef MATH_H
#define MATH_H

int add(int a, int b);
typedef int (*cb_t)(int);
struct point make_point(int x, int y);
size_t buffer_len(const char *buf, size_t size);
#endif
"""

EMPTY_C = """\
/* constants only */
int answer = 42;
"""


@pytest.fixture
def c_project(tmp_path) -> Path:
    """
    Directory with two C files that contain functions, plus files the
    scanner must ignore (no functions, wrong extension, subdirectory).
    """
    return write_project(
        tmp_path,
        {
            "math.c": MATH_C,
            "math.h": MATH_H,
            "empty.c": EMPTY_C,
            "notes.txt": "int not_c(void)\n",
            "sub/inner.c": "int inner(void)\n{\n}\n",
        },
    )


@pytest.fixture
def project(c_project) -> Project:
    """Scanned Project over c_project."""
    p = Project(c_project, Settings())
    p.scan()
    return p

