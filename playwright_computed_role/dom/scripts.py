"""Browser-side scripts injected into pages."""

import json
from typing import Dict, Iterable

# Shared state lives on the document under this registry symbol, so the init
# script, the snapshot script and the selector engine all see the same maps.
STATE_SYMBOL = "__getByComputedRole"

# Runs before any page script (context.add_init_script). Wraps the two
# construction operations so closed shadow roots and element internals are
# recorded, and refuses to wrap them twice.
INIT_SCRIPT = """
(() => {
    const symbol = Symbol.for("%(symbol)s");

    if (Reflect.has(document, symbol)) {
        throw new Error("computed role interception is already installed in this document");
    }

    const state = {
        internals: new WeakMap(),
        shadows: new WeakMap(),
        refs: new WeakMap(),
        handles: new Map(),
        nextRef: 1,
    };

    const { attachInternals, attachShadow } = HTMLElement.prototype;

    Object.assign(HTMLElement.prototype, {
        attachInternals() {
            const internals = attachInternals.call(this);
            state.internals.set(this, internals);
            return internals;
        },
        attachShadow(options) {
            const shadowRoot = attachShadow.call(this, options);
            state.shadows.set(this, shadowRoot);
            return shadowRoot;
        },
    });

    Reflect.set(document, symbol, state);
})();
""" % {"symbol": STATE_SYMBOL}

# Serializes the whole document (entering recorded shadow roots) and returns
# the refs of the elements passed in as query roots. Refs are stable per
# element for the lifetime of the document and are resolved back by the
# selector engine below.
SNAPSHOT_SCRIPT = """
(roots) => {
    const symbol = Symbol.for("%(symbol)s");
    let state = Reflect.get(document, symbol);
    if (!state) {
        state = { internals: new WeakMap(), shadows: new WeakMap(), refs: new WeakMap(), handles: new Map(), nextRef: 1 };
        Reflect.set(document, symbol, state);
    }

    // Drop handles whose element has been collected.
    for (const [ref, handle] of state.handles) {
        if (handle.deref() === undefined) {
            state.handles.delete(ref);
        }
    }

    const refOf = (node) => {
        let ref = state.refs.get(node);
        if (ref === undefined) {
            ref = state.nextRef++;
            state.refs.set(node, ref);
            state.handles.set(ref, new WeakRef(node));
        }
        return ref;
    };

    const refsOf = (elements) => (elements ? Array.from(elements, refOf) : null);

    const serialize = (node) => {
        const out = { ref: refOf(node), type: node.nodeType };

        if (node.nodeType === Node.TEXT_NODE) {
            out.text = node.nodeValue ?? "";
            return out;
        }

        if (node.nodeType === Node.ELEMENT_NODE) {
            out.tag = node.localName;
            out.attributes = Object.fromEntries(Array.from(node.attributes, (attr) => [attr.name, attr.value]));

            const style = getComputedStyle(node);
            out.display = style.display;
            out.visibility = style.visibility;
            out.inert = Boolean(node.inert);

            if (typeof node.value === "string") {
                out.value = node.value;
            }

            if (node instanceof HTMLSlotElement) {
                out.assigned = node.assignedNodes().map(refOf);
            }

            const shadowRoot = state.shadows.get(node);
            if (shadowRoot) {
                out.shadowRoot = serialize(shadowRoot);
                out.shadowMode = shadowRoot.mode;
            }

            const internals = state.internals.get(node);
            if (internals) {
                out.internals = {
                    role: internals.role ?? null,
                    ariaLabel: internals.ariaLabel ?? null,
                    labelledBy: refsOf(internals.ariaLabelledByElements),
                    ariaDescription: internals.ariaDescription ?? null,
                    describedBy: refsOf(internals.ariaDescribedByElements),
                };
            }
        }

        out.children = Array.from(node.childNodes)
            .filter((child) => child.nodeType === Node.ELEMENT_NODE || child.nodeType === Node.TEXT_NODE)
            .map(serialize);
        return out;
    };

    const scope = Array.isArray(roots) ? roots : [document];
    return { document: serialize(document), roots: scope.map(refOf) };
}
""" % {"symbol": STATE_SYMBOL}

# Selector engine registered with Playwright. The body is a JSON filter. When
# it carries "refs" (a pinned snapshot result) those refs are resolved to
# connected elements under the query root. Otherwise the role, name and
# description rules run in the page on every resolution, so locators keep
# auto-waiting and retrying. The rule tables are filled in from the Python
# engine by ``selector_engine_script``.
SELECTOR_ENGINE_TEMPLATE = """
(() => {
    const symbol = Symbol.for("%(symbol)s");
    const TAG_ROLES = %(tag_roles)s;
    const INPUT_ROLES = %(input_roles)s;
    const CONTENT_ROLES = new Set(%(content_roles)s);
    const BUTTON_INPUT_TYPES = new Set(%(button_input_types)s);

    const stateOf = () => Reflect.get(document, symbol)
        ?? { internals: new WeakMap(), shadows: new WeakMap(), refs: new WeakMap(), handles: new Map(), nextRef: 1 };

    const normalise = (text) => (text ?? "").replace(/\\s+/g, " ").trim();
    const join = (parts) => parts.map(normalise).filter(Boolean).join(" ");
    const composedParent = (node) => (node instanceof ShadowRoot ? node.host : node.parentNode);
    const isElement = (node) => node.nodeType === Node.ELEMENT_NODE;

    const within = (root, node) => {
        for (let current = node; current; current = composedParent(current)) {
            if (current === root) {
                return true;
            }
        }
        return false;
    };

    const parse = (selector) => {
        const filter = JSON.parse(selector);
        if (!filter || typeof filter !== "object" || Array.isArray(filter)) {
            throw new Error(`computed role selector must be a JSON object: ${selector}`);
        }
        for (const key of ["role", "name", "description"]) {
            if (filter[key] != null && typeof filter[key] !== "string") {
                throw new Error(`computed role selector field "${key}" must be a string: ${selector}`);
            }
        }
        return filter;
    };

    const createContext = (state) => ({
        state,
        hidden: new Map(),
        roles: new Map(),
        names: new Map(),
        contentlessNames: new Map(),
        labels: new Map(),
        inProgress: new Set(),
        cycleHit: false,
    });

    // Visibility

    const hidesItself = (element) => {
        if (element.hasAttribute("hidden")) {
            return true;
        }
        if ((element.getAttribute("aria-hidden") ?? "").trim().toLowerCase() === "true") {
            return true;
        }
        const style = getComputedStyle(element);
        if (style.display === "none" || style.visibility === "hidden") {
            return true;
        }
        return Boolean(element.inert);
    };

    const isHidden = (ctx, target) => {
        const path = [];
        let hidden = false;
        for (let node = target; node; node = composedParent(node)) {
            if (ctx.hidden.has(node)) {
                hidden = ctx.hidden.get(node);
                break;
            }
            path.push(node);
            if (isElement(node) && hidesItself(node)) {
                hidden = true;
                break;
            }
        }
        for (const node of path) {
            ctx.hidden.set(node, hidden);
        }
        return hidden;
    };

    // Roles

    const resolveRole = (ctx, element) => {
        const explicit = element.getAttribute("role");
        if (explicit) {
            return explicit;
        }
        const tag = element.localName;
        if (Object.prototype.hasOwnProperty.call(TAG_ROLES, tag)) {
            return TAG_ROLES[tag];
        }
        if (tag === "input") {
            return INPUT_ROLES[element.type] ?? "textbox";
        }
        if (tag === "section") {
            return accessibleName(ctx, element, "region", false) ? "region" : "generic";
        }
        if (tag === "select") {
            return element.hasAttribute("multiple") ? "listbox" : "combobox";
        }
        if (tag === "a" || tag === "area") {
            return element.hasAttribute("href") ? "link" : null;
        }
        const internals = ctx.state.internals.get(element);
        return internals && internals.role ? internals.role : null;
    };

    const roleOf = (ctx, element) => {
        if (!ctx.roles.has(element)) {
            ctx.roles.set(element, resolveRole(ctx, element));
        }
        return ctx.roles.get(element);
    };

    // Names

    const idRefs = (element, ids) => {
        const scope = element.getRootNode();
        if (!ids || typeof scope.getElementById !== "function") {
            return [];
        }
        return ids.split(/\\s+/).filter(Boolean).map((id) => scope.getElementById(id)).filter(Boolean);
    };

    const asText = (ctx, node) => {
        if (node.nodeType === Node.TEXT_NODE) {
            return node.nodeValue ?? "";
        }
        if (!isElement(node) || isHidden(ctx, node)) {
            return "";
        }
        const tag = node.localName;
        if (tag === "img") {
            return node.getAttribute("alt") ?? "";
        }
        if (tag === "input") {
            if (BUTTON_INPUT_TYPES.has(node.type)) {
                return node.value ?? "";
            }
            return node.type === "image" ? node.getAttribute("alt") ?? "" : "";
        }
        if (node instanceof HTMLSlotElement) {
            const assigned = node.assignedNodes({ flatten: true });
            if (assigned.length) {
                return join(assigned.map((child) => asText(ctx, child)));
            }
        }
        const shadowRoot = ctx.state.shadows.get(node);
        const children = shadowRoot ? shadowRoot.childNodes : node.childNodes;
        return join(Array.from(children, (child) => asText(ctx, child)));
    };

    const labelsFor = (ctx, scope, id) => {
        let index = ctx.labels.get(scope);
        if (!index) {
            index = new Map();
            for (const label of scope.querySelectorAll("label[for]")) {
                const target = label.getAttribute("for");
                if (!index.has(target)) {
                    index.set(target, []);
                }
                index.get(target).push(label);
            }
            ctx.labels.set(scope, index);
        }
        return index.get(id) ?? [];
    };

    const labelText = (ctx, element) => {
        const scope = element.getRootNode();
        if (element.id && typeof scope.getElementById === "function") {
            const text = join(labelsFor(ctx, scope, element.id).map((label) => asText(ctx, label)));
            if (text) {
                return text;
            }
        }
        const labels = element.labels;
        return labels && labels.length ? join(Array.from(labels, (label) => asText(ctx, label))) : "";
    };

    const resolveName = (ctx, element, knownRole, allowContent) => {
        const internals = ctx.state.internals.get(element);

        let refs = internals ? internals.ariaLabelledByElements : null;
        if (refs == null) {
            refs = idRefs(element, element.getAttribute("aria-labelledby"));
        }
        if (refs.length) {
            const text = join(Array.from(refs, (ref) => accessibleName(ctx, ref, null, true)));
            if (text) {
                return [text, "labelledby"];
            }
        }

        let label = internals && internals.ariaLabel ? internals.ariaLabel : null;
        if (label == null) {
            label = element.getAttribute("aria-label");
        }
        label = normalise(label);
        if (label) {
            return [label, "label"];
        }

        const native = labelText(ctx, element);
        if (native) {
            return [native, "native-label"];
        }

        const tag = element.localName;
        const alt = normalise(element.getAttribute("alt"));
        if (alt && (tag === "img" || (tag === "input" && element.type === "image"))) {
            return [alt, "alt"];
        }
        if (tag === "input" && BUTTON_INPUT_TYPES.has(element.type) && element.value) {
            return [normalise(element.value), "value"];
        }

        const title = normalise(element.getAttribute("title"));
        if (title) {
            return [title, "title"];
        }
        if (!allowContent) {
            return ["", ""];
        }
        const text = asText(ctx, element);
        if (!text) {
            return ["", ""];
        }
        return [text, CONTENT_ROLES.has(knownRole || roleOf(ctx, element)) ? "contents" : "text"];
    };

    // A name computed after running into an element already on the call
    // chain depends on where the chain started, so it is not memoized.
    const nameWithSource = (ctx, element, knownRole = null, allowContent = true) => {
        const cache = allowContent ? ctx.names : ctx.contentlessNames;
        if (cache.has(element)) {
            return cache.get(element);
        }
        if (ctx.inProgress.has(element)) {
            ctx.cycleHit = true;
            return ["", ""];
        }
        const outerHit = ctx.cycleHit;
        let hit = false;
        let result;
        ctx.cycleHit = false;
        ctx.inProgress.add(element);
        try {
            result = resolveName(ctx, element, knownRole, allowContent);
        } finally {
            ctx.inProgress.delete(element);
            hit = ctx.cycleHit;
            ctx.cycleHit = outerHit || hit;
        }
        if (!hit) {
            cache.set(element, result);
        }
        return result;
    };

    const accessibleName = (ctx, element, knownRole = null, allowContent = true) =>
        nameWithSource(ctx, element, knownRole, allowContent)[0];

    const descriptionOf = (ctx, element) => {
        const internals = ctx.state.internals.get(element);

        let refs = internals ? internals.ariaDescribedByElements : null;
        if (refs == null) {
            refs = idRefs(element, element.getAttribute("aria-describedby"));
        }
        if (refs.length) {
            const text = join(Array.from(refs, (ref) => accessibleName(ctx, ref, null, true)));
            if (text) {
                return text;
            }
        }

        let description = internals && internals.ariaDescription ? internals.ariaDescription : null;
        if (description == null) {
            description = element.getAttribute("aria-description");
        }
        description = normalise(description);
        if (description) {
            return description;
        }

        const title = normalise(element.getAttribute("title"));
        return title && nameWithSource(ctx, element)[1] !== "title" ? title : "";
    };

    // Traversal

    const contentOf = (ctx, element) => {
        if (element instanceof HTMLSlotElement) {
            const assigned = element.assignedElements({ flatten: true });
            if (assigned.length) {
                return assigned;
            }
        }
        const shadowRoot = ctx.state.shadows.get(element);
        return shadowRoot ? [shadowRoot] : Array.from(element.childNodes);
    };

    function* walk(ctx, root) {
        const stack = [root];
        const visited = new Set();
        while (stack.length) {
            const node = stack.pop();
            if (visited.has(node)) {
                continue;
            }
            visited.add(node);
            let next;
            if (isElement(node)) {
                if (isHidden(ctx, node)) {
                    continue;
                }
                next = contentOf(ctx, node);
            } else {
                next = Array.from(node.childNodes);
            }
            for (let i = next.length - 1; i >= 0; i--) {
                const child = next[i];
                if (isElement(child) || child.nodeType === Node.DOCUMENT_FRAGMENT_NODE) {
                    stack.push(child);
                }
            }
            if (isElement(node)) {
                yield node;
            }
        }
    }

    const textMatches = (actual, expected, exact) => {
        if (!actual) {
            return false;
        }
        if (exact) {
            return actual === expected;
        }
        return actual.toLowerCase().includes(expected.toLowerCase());
    };

    const matches = (ctx, element, filter) => {
        const role = roleOf(ctx, element);
        if (role !== filter.role) {
            return false;
        }
        if (filter.name && !textMatches(accessibleName(ctx, element, role), filter.name, filter.exact)) {
            return false;
        }
        if (filter.description && !textMatches(descriptionOf(ctx, element), filter.description, filter.exact)) {
            return false;
        }
        return true;
    };

    const resolve = (root, selector, firstOnly) => {
        const filter = parse(selector);
        const state = stateOf();

        if (Array.isArray(filter.refs)) {
            const pinned = filter.refs
                .map((ref) => state.handles.get(ref)?.deref())
                .filter((element) => element && element.isConnected && within(root, element));
            return firstOnly ? pinned.slice(0, 1) : pinned;
        }

        if (!filter.role) {
            return [];
        }
        const ctx = createContext(state);
        const found = [];
        for (const element of walk(ctx, root)) {
            if (matches(ctx, element, filter)) {
                found.push(element);
                if (firstOnly) {
                    break;
                }
            }
        }
        return found;
    };

    return {
        query(root, selector) {
            return resolve(root, selector, true)[0] ?? null;
        },
        queryAll(root, selector) {
            return resolve(root, selector, false);
        },
    };
})()
"""


def selector_engine_script(
    tag_roles: Dict[str, str],
    input_roles: Dict[str, str],
    content_roles: Iterable[str],
    button_input_types: Iterable[str],
) -> str:
    """
    Render the in-page selector engine with the given rule tables.

    Args:
        tag_roles: Implicit role per tag name
        input_roles: Implicit role per ``input`` type, textbox otherwise
        content_roles: Roles whose name may come from content
        button_input_types: ``input`` types named by their value

    Returns:
        Script source for ``playwright.selectors.register``
    """
    return SELECTOR_ENGINE_TEMPLATE % {
        "symbol": STATE_SYMBOL,
        "tag_roles": json.dumps(tag_roles, sort_keys=True),
        "input_roles": json.dumps(input_roles, sort_keys=True),
        "content_roles": json.dumps(sorted(content_roles)),
        "button_input_types": json.dumps(list(button_input_types)),
    }
