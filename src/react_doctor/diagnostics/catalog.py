# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static category and remediation tables keyed by plugin and rule."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from ..core.models import Category

REACT_COMPILER_PLUGIN: Final[str] = "react-hooks-js"
REACT_COMPILER_MESSAGE: Final[str] = "React Compiler can't optimize this code"
DOCTOR_PLUGIN: Final[str] = "react-doctor"

PLUGIN_CATEGORIES: Final[Mapping[str, Category]] = MappingProxyType(
    {
        "react": Category.CORRECTNESS,
        "react-hooks": Category.CORRECTNESS,
        REACT_COMPILER_PLUGIN: Category.REACT_COMPILER,
        "react-perf": Category.PERFORMANCE,
        "jsx-a11y": Category.ACCESSIBILITY,
    },
)

RULE_CATEGORIES: Final[Mapping[str, Category]] = MappingProxyType(
    {
        "react-doctor/no-derived-state-effect": Category.STATE_AND_EFFECTS,
        "react-doctor/no-fetch-in-effect": Category.STATE_AND_EFFECTS,
        "react-doctor/no-cascading-set-state": Category.STATE_AND_EFFECTS,
        "react-doctor/no-effect-event-handler": Category.STATE_AND_EFFECTS,
        "react-doctor/no-derived-useState": Category.STATE_AND_EFFECTS,
        "react-doctor/prefer-useReducer": Category.STATE_AND_EFFECTS,
        "react-doctor/rerender-lazy-state-init": Category.PERFORMANCE,
        "react-doctor/rerender-functional-setstate": Category.PERFORMANCE,
        "react-doctor/rerender-dependencies": Category.STATE_AND_EFFECTS,
        "react-doctor/no-generic-handler-names": Category.ARCHITECTURE,
        "react-doctor/no-giant-component": Category.ARCHITECTURE,
        "react-doctor/no-render-in-render": Category.ARCHITECTURE,
        "react-doctor/no-nested-component-definition": Category.CORRECTNESS,
        "react-doctor/no-usememo-simple-expression": Category.PERFORMANCE,
        "react-doctor/no-layout-property-animation": Category.PERFORMANCE,
        "react-doctor/rerender-memo-with-default-value": Category.PERFORMANCE,
        "react-doctor/rendering-animate-svg-wrapper": Category.PERFORMANCE,
        "react-doctor/rendering-usetransition-loading": Category.PERFORMANCE,
        "react-doctor/rendering-hydration-no-flicker": Category.PERFORMANCE,
        "react-doctor/no-transition-all": Category.PERFORMANCE,
        "react-doctor/no-global-css-variable-animation": Category.PERFORMANCE,
        "react-doctor/no-large-animated-blur": Category.PERFORMANCE,
        "react-doctor/no-scale-from-zero": Category.PERFORMANCE,
        "react-doctor/no-permanent-will-change": Category.PERFORMANCE,
        "react-doctor/no-secrets-in-client-code": Category.SECURITY,
        "react-doctor/no-barrel-import": Category.BUNDLE_SIZE,
        "react-doctor/no-full-lodash-import": Category.BUNDLE_SIZE,
        "react-doctor/no-moment": Category.BUNDLE_SIZE,
        "react-doctor/prefer-dynamic-import": Category.BUNDLE_SIZE,
        "react-doctor/use-lazy-motion": Category.BUNDLE_SIZE,
        "react-doctor/no-undeferred-third-party": Category.BUNDLE_SIZE,
        "react-doctor/no-array-index-as-key": Category.CORRECTNESS,
        "react-doctor/rendering-conditional-render": Category.CORRECTNESS,
        "react-doctor/no-prevent-default": Category.CORRECTNESS,
        "react-doctor/nextjs-no-img-element": Category.NEXTJS,
        "react-doctor/nextjs-async-client-component": Category.NEXTJS,
        "react-doctor/nextjs-no-a-element": Category.NEXTJS,
        "react-doctor/nextjs-no-use-search-params-without-suspense": Category.NEXTJS,
        "react-doctor/nextjs-no-client-fetch-for-server-data": Category.NEXTJS,
        "react-doctor/nextjs-missing-metadata": Category.NEXTJS,
        "react-doctor/nextjs-no-client-side-redirect": Category.NEXTJS,
        "react-doctor/nextjs-no-redirect-in-try-catch": Category.NEXTJS,
        "react-doctor/nextjs-image-missing-sizes": Category.NEXTJS,
        "react-doctor/nextjs-no-native-script": Category.NEXTJS,
        "react-doctor/nextjs-inline-script-missing-id": Category.NEXTJS,
        "react-doctor/nextjs-no-font-link": Category.NEXTJS,
        "react-doctor/nextjs-no-css-link": Category.NEXTJS,
        "react-doctor/nextjs-no-polyfill-script": Category.NEXTJS,
        "react-doctor/nextjs-no-head-import": Category.NEXTJS,
        "react-doctor/nextjs-no-side-effect-in-get-handler": Category.SECURITY,
        "react-doctor/server-auth-actions": Category.SERVER,
        "react-doctor/server-after-nonblocking": Category.SERVER,
        "react-doctor/client-passive-event-listeners": Category.PERFORMANCE,
        "react-doctor/async-parallel": Category.PERFORMANCE,
    },
)

RULE_HELP: Final[Mapping[str, str]] = MappingProxyType(
    {
        # State & effects
        "no-derived-state-effect": (
            "Compute during render: `const derived = computeFrom(dep1, dep2)`; no useEffect needed"
        ),
        "no-fetch-in-effect": (
            "Use `useQuery()` from @tanstack/react-query, `useSWR()`, or fetch in a Server Component instead"
        ),
        "no-cascading-set-state": (
            "Combine into useReducer: `const [state, dispatch] = useReducer(reducer, initialState)`"
        ),
        "no-effect-event-handler": (
            "Move the conditional logic into onClick, onChange, or onSubmit handlers directly"
        ),
        "no-derived-useState": (
            "Remove useState and compute the value inline: `const value = transform(propName)`"
        ),
        "prefer-useReducer": (
            "Group related state: `const [state, dispatch] = useReducer(reducer, { field1, field2, ... })`"
        ),
        "rerender-lazy-state-init": (
            "Wrap in an arrow function so it only runs once: `useState(() => expensiveComputation())`"
        ),
        "rerender-functional-setstate": (
            "Use the callback form: `setState(prev => prev + 1)` to always read the latest value"
        ),
        "rerender-dependencies": (
            "Extract to a useMemo, useRef, or module-level constant so the reference is stable"
        ),
        # Architecture
        "no-generic-handler-names": (
            "Rename to describe the action: e.g. `handleSubmit` → `saveUserProfile`, `handleClick` → `toggleSidebar`"
        ),
        "no-giant-component": (
            "Extract logical sections into focused components: `<UserHeader />`, `<UserActions />`, etc."
        ),
        "no-render-in-render": (
            "Extract to a named component: `const ListItem = ({ item }) => <div>{item.name}</div>`"
        ),
        "no-nested-component-definition": "Move to a separate file or to module scope above the parent component",
        # Performance
        "no-usememo-simple-expression": (
            "Remove useMemo; property access, math, and ternaries are already cheap without memoization"
        ),
        "no-layout-property-animation": (
            "Use `transform: translateX()` or `scale()` instead; they run on the compositor and skip layout/paint"
        ),
        "rerender-memo-with-default-value": (
            "Move to module scope: `const EMPTY_ITEMS: Item[] = []` then use as the default value"
        ),
        "rendering-animate-svg-wrapper": "Wrap the SVG: `<motion.div animate={...}><svg>...</svg></motion.div>`",
        "rendering-usetransition-loading": (
            "Replace with `const [isPending, startTransition] = useTransition()`; avoids a re-render for the "
            "loading state"
        ),
        "rendering-hydration-no-flicker": (
            "Use `useSyncExternalStore(subscribe, getSnapshot, getServerSnapshot)` or add "
            "`suppressHydrationWarning` to the element"
        ),
        "no-transition-all": (
            'List specific properties: `transition: "opacity 200ms, transform 200ms"`, or in Tailwind use '
            "`transition-colors`, `transition-opacity`, or `transition-transform`"
        ),
        "no-global-css-variable-animation": (
            "Set the variable on the nearest element instead of a parent, or use `@property` with "
            "`inherits: false` to prevent cascade. Better yet, use targeted `element.style.transform` updates"
        ),
        "no-large-animated-blur": (
            "Keep blur radius under 10px, or apply blur to a smaller element. Large blurs multiply GPU memory "
            "usage with layer size"
        ),
        "no-scale-from-zero": (
            "Use `initial={{ scale: 0.95, opacity: 0 }}`; elements should deflate like a balloon, not vanish "
            "into a point"
        ),
        "no-permanent-will-change": (
            "Add will-change on animation start (`onMouseEnter`) and remove on end (`onAnimationEnd`). "
            "Permanent promotion wastes GPU memory and can degrade performance"
        ),
        # Security
        "no-secrets-in-client-code": (
            "Move to server-side `process.env.SECRET_NAME`. Only `NEXT_PUBLIC_*` vars are safe for the client "
            "(and should not contain secrets)"
        ),
        # Bundle size
        "no-barrel-import": (
            "Import from the direct path: `import { Button } from './components/Button'` instead of `./components`"
        ),
        "no-full-lodash-import": (
            "Import the specific function: `import debounce from 'lodash/debounce'`; saves ~70kb"
        ),
        "no-moment": (
            "Replace with `import { format } from 'date-fns'` (tree-shakeable) or `import dayjs from 'dayjs'` (2kb)"
        ),
        "prefer-dynamic-import": (
            "Use `const Component = dynamic(() => import('library'), { ssr: false })` from next/dynamic or "
            "React.lazy()"
        ),
        "use-lazy-motion": (
            'Use `import { LazyMotion, m } from "framer-motion"` with `domAnimation` features; saves ~30kb'
        ),
        "no-undeferred-third-party": 'Use `next/script` with `strategy="lazyOnload"` or add the `defer` attribute',
        # Correctness
        "no-array-index-as-key": (
            "Use a stable unique identifier: `key={item.id}` or `key={item.slug}`; index keys break on "
            "reorder/filter"
        ),
        "rendering-conditional-render": (
            "Change to `{items.length > 0 && <List />}` or use a ternary: `{items.length ? <List /> : null}`"
        ),
        "no-prevent-default": (
            "Use `<form action={serverAction}>` (works without JS) or `<button>` instead of `<a>` with "
            "preventDefault"
        ),
        # Next.js
        "nextjs-no-img-element": (
            "`import Image from 'next/image'` provides automatic WebP/AVIF, lazy loading, and responsive srcset"
        ),
        "nextjs-async-client-component": (
            "Fetch data in a parent Server Component and pass it as props, or use useQuery/useSWR in the client "
            "component"
        ),
        "nextjs-no-a-element": (
            "`import Link from 'next/link'` enables client-side navigation, prefetching, and preserves scroll "
            "position"
        ),
        "nextjs-no-use-search-params-without-suspense": (
            "Wrap the component using useSearchParams: "
            "`<Suspense fallback={<Skeleton />}><SearchComponent /></Suspense>`"
        ),
        "nextjs-no-client-fetch-for-server-data": (
            "Remove 'use client' and fetch directly in the Server Component; no API round-trip, secrets stay on "
            "server"
        ),
        "nextjs-missing-metadata": (
            "Add `export const metadata = { title: '...', description: '...' }` or "
            "`export async function generateMetadata()`"
        ),
        "nextjs-no-client-side-redirect": (
            "Use `redirect('/path')` from 'next/navigation' in a Server Component, or handle in middleware"
        ),
        "nextjs-no-redirect-in-try-catch": (
            "Move the redirect/notFound call outside the try block, or add `unstable_rethrow(error)` in the catch"
        ),
        "nextjs-image-missing-sizes": (
            'Add sizes for responsive behavior: `sizes="(max-width: 768px) 100vw, 50vw"` matching your layout '
            "breakpoints"
        ),
        "nextjs-no-native-script": (
            '`import Script from "next/script"`; use `strategy="afterInteractive"` for analytics or '
            '`"lazyOnload"` for widgets'
        ),
        "nextjs-inline-script-missing-id": (
            'Add `id="descriptive-name"` so Next.js can track, deduplicate, and re-execute the script correctly'
        ),
        "nextjs-no-font-link": (
            '`import { Inter } from "next/font/google"`: self-hosted, zero layout shift, no render-blocking '
            "requests"
        ),
        "nextjs-no-css-link": (
            "Import CSS directly: `import './styles.css'` or use CSS Modules: "
            "`import styles from './Button.module.css'`"
        ),
        "nextjs-no-polyfill-script": (
            "Next.js includes polyfills for fetch, Promise, Object.assign, Array.from, and 50+ others automatically"
        ),
        "nextjs-no-head-import": (
            "Use the Metadata API instead: `export const metadata = { title: '...' }` or "
            "`export async function generateMetadata()`"
        ),
        "nextjs-no-side-effect-in-get-handler": (
            "Move the side effect to a POST handler and use a <form> or fetch with method POST; GET requests can "
            "be triggered by prefetching and are vulnerable to CSRF"
        ),
        # Server
        "server-auth-actions": (
            "Add `const session = await auth()` at the top and throw/redirect if unauthorized before any data access"
        ),
        "server-after-nonblocking": (
            "`import { after } from 'next/server'` then wrap: `after(() => analytics.track(...))` so the response "
            "isn't blocked"
        ),
        "client-passive-event-listeners": (
            "Add `{ passive: true }` as the third argument: `addEventListener('scroll', handler, { passive: true })`"
        ),
        "async-parallel": (
            "Use `const [a, b] = await Promise.all([fetchA(), fetchB()])` to run independent operations concurrently"
        ),
    },
)

__all__ = [
    "DOCTOR_PLUGIN",
    "PLUGIN_CATEGORIES",
    "REACT_COMPILER_MESSAGE",
    "REACT_COMPILER_PLUGIN",
    "RULE_CATEGORIES",
    "RULE_HELP",
]
