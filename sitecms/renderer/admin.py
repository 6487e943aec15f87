"""
Pages d'administration — liste des fichiers, éditeur visuel, langues.

Le formulaire est rendu côté serveur à partir de l'EditorView ; le JS de la
page envoie chaque modification à /api/admin/editor/change puis recharge le
fragment via /api/admin/editor/form.
"""
import json
from html import escape
from typing import Any, Dict, List, Optional

from ..blocks import list_specs
from ..editor.form import EditorView, FieldNode
from ..editor.ops import list_to_lines
from ..editor.schema import ArrayKind, EditType


def _e(value: Any) -> str:
    return escape("" if value is None else str(value))


def _p(path: List[Any]) -> str:
    return escape(json.dumps(path), quote=True)


def _js(value: Any) -> str:
    # valeur injectée dans un <script> : "</" fermerait la balise
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


_CSS = """
*{box-sizing:border-box;margin:0;padding:0}
body{font-family:'Segoe UI',sans-serif;background:#f9fafb;color:#1a1a2e;line-height:1.5}
a{color:#2563eb}
table{width:100%;border-collapse:collapse}
th{background:#f3f4f6;padding:8px 10px;text-align:left;font-size:12px;color:#6b7280;font-weight:600;border-bottom:1px solid #e5e7eb}
td{border-bottom:1px solid #f3f4f6;padding:6px 10px;font-size:13px;vertical-align:top}
label{display:block;font-size:12px;color:#6b7280;margin-bottom:4px}
input[type=text],input[type=number],textarea,select{width:100%;border:1px solid #e5e7eb;border-radius:4px;padding:6px 8px;font-size:13px;font-family:inherit}
textarea{min-height:80px;resize:vertical}
.field{margin-bottom:14px}
.group{border:1px solid #e5e7eb;border-radius:8px;padding:14px;margin-bottom:14px;background:#fff}
.group__title{font-size:11px;font-weight:bold;text-transform:uppercase;letter-spacing:1px;color:#6b7280;margin-bottom:10px;display:flex;justify-content:space-between;align-items:center}
.help{font-size:11px;color:#9ca3af;margin-top:2px}
.btn{background:#e94560;color:#fff;border:none;padding:6px 14px;border-radius:4px;cursor:pointer;font-size:12px}
.btn--ghost{background:#f3f4f6;color:#374151}
.btn--danger{background:#fee2e2;color:#b91c1c}
.thumbs{display:grid;grid-template-columns:repeat(4,1fr);gap:10px}
.thumb{border:1px solid #e5e7eb;border-radius:6px;overflow:hidden;background:#fff}
.thumb img{width:100%;height:90px;object-fit:cover;background:#f3f4f6;display:block}
.badge{font-size:10px;background:#e0e7ff;color:#3730a3;padding:2px 8px;border-radius:10px}
.warn{background:#fffbeb;border:1px solid #fde68a;color:#92400e;padding:10px 14px;border-radius:6px;margin-bottom:16px;font-size:13px}
.err{color:#e94560;font-size:12px}
.toast{position:fixed;bottom:24px;right:24px;background:#1a1a2e;color:#fff;padding:12px 20px;border-radius:8px;font-size:13px;display:none;z-index:999}
.tabs a{padding:8px 14px;font-size:13px;text-decoration:none;border-radius:6px 6px 0 0;color:#374151;cursor:pointer}
.tabs a.on{background:#fff;border:1px solid #e5e7eb;border-bottom:none;font-weight:bold}
"""


def _nav(active: str) -> str:
    tabs = [("files", "📄 Contenus", "/admin"), ("languages", "🌐 Langues", "/admin/languages")]
    links = "".join(
        f'<a href="{href}" style="padding:10px 18px;border-radius:6px;text-decoration:none;'
        f'font-size:13px;font-weight:{"bold" if t == active else "normal"};'
        f'background:{"#e94560" if t == active else "#f9fafb"};color:{"#fff" if t == active else "#374151"}">{label}</a>'
        for t, label, href in tabs
    )
    return (
        f'<div style="background:#fff;border-bottom:1px solid #e5e7eb;padding:0 20px;'
        f'display:flex;align-items:center;gap:8px;flex-wrap:wrap">'
        f'<a href="/admin" style="color:#e94560;font-weight:bold;font-size:15px;'
        f'padding:12px 16px 12px 0;text-decoration:none">⚡ SiteCMS</a>'
        f'{links}<a href="/admin/logout" style="margin-left:auto;font-size:12px;color:#6b7280">Déconnexion</a></div>'
    )


def _page(title: str, active: str, body: str, script: str = "") -> str:
    return f"""<!DOCTYPE html><html lang="fr"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>{_e(title)} — SiteCMS Admin</title>
<style>{_CSS}</style>
</head><body>
{_nav(active)}
<div style="max-width:1200px;margin:0 auto;padding:24px">
{body}
</div>
<div class="toast" id="toast"></div>
<script>
function toast(msg){{const t=document.getElementById('toast');t.textContent=msg;t.style.display='block';setTimeout(()=>t.style.display='none',2500)}}
{script}
</script>
</body></html>"""


# ── Fragment formulaire ─────────────────────────────────────────────────────

def _scalar(node: FieldNode) -> str:
    path, t = _p(node.path), node.edit_type
    label = f"<label>{_e(node.label)}</label>"
    help_html = f'<div class="help">{_e(node.help)}</div>' if node.help else ""

    if t is EditType.BOOLEAN:
        checked = " checked" if node.value else ""
        return (f'<div class="field"><label><input type="checkbox"{checked} '
                f'onchange="setField(this.dataset.path,this.checked)" data-path="{path}"> {_e(node.label)}</label>{help_html}</div>')
    if t is EditType.NUMBER:
        return (f'<div class="field">{label}<input type="number" step="any" value="{_e(node.value)}" data-path="{path}" '
                f'onchange="setNumber(this.dataset.path,this.value)">{help_html}</div>')
    if t is EditType.TEXTAREA:
        return (f'<div class="field">{label}<textarea data-path="{path}" '
                f'onchange="setField(this.dataset.path,this.value)">{_e(node.value)}</textarea>{help_html}</div>')
    if t is EditType.SELECT:
        opts = list(node.options)
        if node.value is not None and str(node.value) not in opts:
            opts.insert(0, str(node.value))
        options = "".join(
            f'<option value="{_e(o)}"{" selected" if str(node.value) == o else ""}>{_e(o)}</option>' for o in opts
        )
        return (f'<div class="field">{label}<select data-path="{path}" '
                f'onchange="setField(this.dataset.path,this.value)">{options}</select>{help_html}</div>')
    if t is EditType.IMAGE:
        thumb = f'<img src="{_e(node.value)}" style="width:64px;height:64px;object-fit:cover;margin-top:6px">' if node.value else ""
        return (f'<div class="field">{label}<div style="display:flex;gap:6px">'
                f'<input type="text" value="{_e(node.value)}" data-path="{path}" onchange="setField(this.dataset.path,this.value)">'
                f'<button class="btn btn--ghost" type="button" data-path="{path}" onclick="pickImage(this.dataset.path)">🖼</button>'
                f'</div>{thumb}{help_html}</div>')
    if t is EditType.COLOR:
        return (f'<div class="field">{label}<input type="text" value="{_e(node.value)}" data-path="{path}" '
                f'onchange="setField(this.dataset.path,this.value)" placeholder="#2563eb / blue">{help_html}</div>')
    return (f'<div class="field">{label}<input type="text" value="{_e(node.value)}" data-path="{path}" '
            f'onchange="setField(this.dataset.path,this.value)">{help_html}</div>')


def _thumb(src: Any) -> str:
    return f'<img src="{_e(src)}">' if src else "<img>"


def _images(node: FieldNode) -> str:
    path = _p(node.path)
    values = node.value or []
    cells = "".join(
        f'<div class="thumb">{_thumb(v)}'
        f'<div style="display:flex;gap:4px;padding:4px">'
        f'<button class="btn btn--ghost" type="button" data-path="{path}" onclick="pickImageAt(this.dataset.path,{i})">🖼</button>'
        f'<button class="btn btn--danger" type="button" data-path="{path}" '
        f'onclick="change({{op:\'image_remove\',path:JSON.parse(this.dataset.path),index:{i}}})">✕</button></div></div>'
        for i, v in enumerate(values)
    ) or '<div class="help">Aucune image. Cliquez sur "Add Image".</div>'
    return (f'<div class="group"><div class="group__title">{_e(node.label)} ({len(values)})'
            f'<button class="btn btn--ghost" type="button" data-path="{path}" '
            f'onclick="change({{op:\'image_add\',path:JSON.parse(this.dataset.path)}})">Add Image</button></div>'
            f'<div class="thumbs">{cells}</div></div>')


def _primitives(node: FieldNode) -> str:
    path = _p(node.path)
    help_html = f'<div class="help">{_e(node.help)}</div>' if node.help else '<div class="help">Une valeur par ligne</div>'
    return (f'<div class="field"><label>{_e(node.label)}</label>'
            f'<textarea data-path="{path}" style="font-family:monospace" '
            f'onchange="change({{op:\'set_lines\',path:JSON.parse(this.dataset.path),value:this.value}})">'
            f'{_e(list_to_lines(node.value or []))}</textarea>{help_html}</div>')


def _records(node: FieldNode) -> str:
    path = _p(node.path)
    head = "".join(f"<th>{_e(c)}</th>" for c in node.columns)
    rows = ""
    for child in node.children:
        idx = child.key
        cells = ""
        for c in node.columns:
            sub = next((n for n in child.children if n.key == c), None)
            cells += f"<td>{_e(_cell(sub))}</td>"
        rows += (f'<tr>{cells}<td style="white-space:nowrap">'
                 f'<button class="btn btn--ghost" type="button" onclick="toggleRow(\'{_e(_row_id(child.path))}\')">✏️</button> '
                 f'<button class="btn btn--danger" type="button" data-path="{path}" '
                 f'onclick="if(confirm(\'Supprimer cette ligne ?\'))change({{op:\'record_delete\',path:JSON.parse(this.dataset.path),index:{idx}}})">🗑</button>'
                 f'</td></tr>'
                 f'<tr id="{_e(_row_id(child.path))}" style="display:none"><td colspan="{len(node.columns) + 1}">'
                 f'{render_fields(child.children) if child.children else _scalar(child)}</td></tr>')
    return (f'<div class="group"><div class="group__title">{_e(node.label)} ({len(node.children)})'
            f'<button class="btn" type="button" data-path="{path}" '
            f'onclick="change({{op:\'record_add\',path:JSON.parse(this.dataset.path)}})">+ Add Item</button></div>'
            f'<table><tr>{head}<th></th></tr>{rows}</table></div>')


def _cell(node: Optional[FieldNode]) -> str:
    if node is None:
        return ""
    if node.edit_type in (EditType.OBJECT, EditType.ARRAY):
        return "{…}" if node.edit_type is EditType.OBJECT else "[…]"
    text = "" if node.value is None else str(node.value)
    return text[:60] + ("…" if len(text) > 60 else "")


def _row_id(path: List[Any]) -> str:
    return "row-" + "-".join(str(p) for p in path)


def _blocks(node: FieldNode) -> str:
    path = _p(node.path)
    options = "".join(f'<option value="{s.type.value}">{_e(s.label)}</option>' for s in list_specs())
    items = ""
    count = len(node.children)
    for child in node.children:
        i = child.key
        items += (f'<div class="group"><div class="group__title"><span><span class="badge">{_e(child.block_type)}</span> '
                  f'{_e(child.block_label)}</span><span>'
                  f'<button class="btn btn--ghost" type="button" data-path="{path}" {"disabled" if i == 0 else ""} '
                  f'onclick="change({{op:\'block_move\',path:JSON.parse(this.dataset.path),index:{i},direction:-1}})">↑</button> '
                  f'<button class="btn btn--ghost" type="button" data-path="{path}" {"disabled" if i == count - 1 else ""} '
                  f'onclick="change({{op:\'block_move\',path:JSON.parse(this.dataset.path),index:{i},direction:1}})">↓</button> '
                  f'<button class="btn btn--danger" type="button" data-path="{path}" '
                  f'onclick="if(confirm(\'Supprimer ce bloc ?\'))change({{op:\'block_remove\',path:JSON.parse(this.dataset.path),index:{i}}})">🗑</button>'
                  f'</span></div>{render_fields(child.children)}</div>')
    return (f'<div class="group"><div class="group__title">Blocks ({count})<span>'
            f'<select id="new-block-type" style="width:auto">{options}</select> '
            f'<button class="btn" type="button" data-path="{path}" '
            f'onclick="change({{op:\'block_add\',path:JSON.parse(this.dataset.path),block_type:document.getElementById(\'new-block-type\').value}})">+ Bloc</button>'
            f'</span></div>{items}</div>')


def render_field(node: FieldNode) -> str:
    if node.edit_type is EditType.OBJECT and node.block_type is None and node.value is None:
        return (f'<div class="group"><div class="group__title">{_e(node.label)}</div>'
                f'{render_fields(node.children)}</div>')
    if node.edit_type is EditType.ARRAY and node.array_kind is not None:
        if node.array_kind is ArrayKind.IMAGES:
            return _images(node)
        if node.array_kind is ArrayKind.PRIMITIVES:
            return _primitives(node)
        if node.array_kind is ArrayKind.BLOCKS:
            return _blocks(node)
        return _records(node)
    return _scalar(node)


def render_fields(nodes: List[FieldNode]) -> str:
    return "".join(render_field(n) for n in nodes)


def render_form(view: EditorView) -> str:
    if len(view.tabs) == 1:
        return render_fields(view.tabs[0].fields)
    links = "".join(
        f'<a class="{"on" if i == 0 else ""}" onclick="showTab({i})" id="tab-link-{i}">{_e(t.name)}</a>'
        for i, t in enumerate(view.tabs)
    )
    panes = "".join(
        f'<div id="tab-{i}" style="display:{"block" if i == 0 else "none"}">{render_fields(t.fields)}</div>'
        for i, t in enumerate(view.tabs)
    )
    return f'<div class="tabs" style="margin-bottom:10px">{links}</div>{panes}'


# ── Pages ───────────────────────────────────────────────────────────────────

def render_files_page(files: List[str], languages: List[Dict[str, Any]]) -> str:
    by_lang: Dict[str, List[str]] = {}
    for f in files:
        by_lang.setdefault(f.split("/", 1)[0], []).append(f)
    rows = ""
    for lang in sorted(by_lang):
        rows += (f'<tr><td colspan="2" style="background:#f3f4f6;font-size:12px;font-weight:bold;color:#6b7280;'
                 f'text-transform:uppercase;letter-spacing:1px">{_e(lang)}</td></tr>')
        for f in by_lang[lang]:
            rows += (f'<tr><td style="font-family:monospace"><a href="/admin/editor?file={_e(f)}">{_e(f)}</a></td>'
                     f'<td style="text-align:right"><button class="btn btn--danger" onclick="delFile(\'{_e(f)}\')">🗑</button></td></tr>')
    lang_opts = "".join(f'<option value="{_e(l["code"])}">{_e(l["code"])}</option>' for l in languages)
    body = f"""
<div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:20px;gap:12px;flex-wrap:wrap">
  <h1 style="font-size:18px">📄 Contenus ({len(files)} fichiers)</h1>
  <div style="display:flex;gap:6px;align-items:center">
    <select id="np-lang" style="width:auto">{lang_opts}</select>
    <select id="np-kind" style="width:auto"><option value="product">Product Page</option>
      <option value="solution">Solution Page</option><option value="blank">Blank JSON</option></select>
    <input id="np-name" type="text" placeholder="nom-de-page" style="width:180px">
    <button class="btn" onclick="createPage()">+ Nouvelle page</button>
  </div>
</div>
<div class="group"><table>{rows}</table></div>"""
    script = """
async function createPage(){
  const r=await fetch('/api/admin/pages',{method:'POST',headers:{'Content-Type':'application/json'},
    body:JSON.stringify({lang:document.getElementById('np-lang').value,kind:document.getElementById('np-kind').value,
    name:document.getElementById('np-name').value})});
  const d=await r.json();
  if(r.ok){location.href='/admin/editor?file='+encodeURIComponent(d.path)}else{toast(d.detail||'Erreur')}
}
async function delFile(f){
  if(!confirm('Supprimer '+f+' ?'))return;
  const r=await fetch('/api/admin/files?file='+encodeURIComponent(f),{method:'DELETE'});
  if(r.ok){location.reload()}else{toast((await r.json()).detail||'Erreur')}
}"""
    return _page("Contenus", "files", body, script)


def render_editor_page(file: str, document: Any, view: EditorView, missing: List[str]) -> str:
    warn = ""
    if missing:
        shown = ", ".join(missing[:8]) + (" …" if len(missing) > 8 else "")
        warn = (f'<div class="warn">⚠️ Structure différente de la langue maître ({len(missing)} chemin(s) manquant(s) : '
                f'<code>{_e(shown)}</code>) <button class="btn" onclick="syncNow()">Synchroniser</button></div>')
    has_blocks = isinstance(document, dict) and isinstance(document.get("blocks"), list)
    preview_btn = '<button class="btn btn--ghost" onclick="setMode(\'preview\')">👁 Aperçu</button>' if has_blocks else ""
    body = f"""
<div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:16px;gap:12px;flex-wrap:wrap">
  <h1 style="font-size:16px;font-family:monospace">{_e(file)}</h1>
  <div style="display:flex;gap:6px">
    <button class="btn btn--ghost" onclick="setMode('form')">🧩 Formulaire</button>
    <button class="btn btn--ghost" onclick="setMode('raw')">{{ }} JSON</button>
    {preview_btn}
    <button class="btn" onclick="save(false)">💾 Enregistrer</button>
  </div>
</div>
{warn}
<div id="mode-form">{render_form(view)}</div>
<div id="mode-raw" style="display:none">
  <div id="raw-error" class="err" style="display:none;margin-bottom:6px"></div>
  <textarea id="raw" style="min-height:520px;font-family:monospace" oninput="rawInput(this.value)"></textarea>
</div>
<div id="mode-preview" style="display:none"><iframe id="preview" style="width:100%;height:640px;border:1px solid #e5e7eb;border-radius:8px;background:#fff"></iframe></div>
<div id="picker" style="display:none;position:fixed;inset:0;background:rgba(0,0,0,.5);z-index:50">
  <div style="background:#fff;max-width:760px;margin:60px auto;border-radius:10px;padding:18px;max-height:80vh;overflow:auto">
    <div style="display:flex;gap:8px;margin-bottom:12px">
      <input id="picker-q" type="text" placeholder="Filtrer…" oninput="loadImages()">
      <input id="picker-file" type="file" accept="image/*" onchange="uploadImage(this.files[0])">
      <button class="btn btn--ghost" onclick="closePicker()">✕</button>
    </div>
    <div class="thumbs" id="picker-grid"></div>
  </div>
</div>"""
    script = f"""
const FILE={_js(file)};
let DOC={_js(document)};
let PICK=null;
const api=(url,body)=>fetch(url,{{method:'POST',headers:{{'Content-Type':'application/json'}},body:JSON.stringify(body)}});
async function change(ch){{
  const r=await api('/api/admin/editor/change',{{document:DOC,change:ch}});
  const d=await r.json();
  if(!r.ok){{toast(d.detail||'Erreur');return}}
  DOC=d.document;await refresh();
}}
function setField(path,value){{change({{op:'set',path:JSON.parse(path),value:value}})}}
function setNumber(path,value){{change({{op:'set_number',path:JSON.parse(path),value:value}})}}
async function refresh(){{
  const r=await api('/api/admin/editor/form',{{document:DOC}});
  document.getElementById('mode-form').innerHTML=(await r.json()).html;
  document.getElementById('raw').value=JSON.stringify(DOC,null,2);
}}
async function rawInput(text){{
  const r=await api('/api/admin/editor/raw',{{text:text,last_good:DOC}});
  const d=await r.json();
  const el=document.getElementById('raw-error');
  if(d.valid){{DOC=d.value;el.style.display='none'}}else{{el.textContent=d.error;el.style.display='block'}}
}}
async function setMode(m){{
  for(const k of ['form','raw','preview'])document.getElementById('mode-'+k).style.display=(k===m?'block':'none');
  if(m==='raw')document.getElementById('raw').value=JSON.stringify(DOC,null,2);
  if(m==='form')await refresh();
  if(m==='preview'){{
    const r=await api('/api/admin/editor/preview',{{blocks:DOC.blocks||[]}});
    document.getElementById('preview').srcdoc=await r.text();
  }}
}}
function showTab(i){{
  document.querySelectorAll('[id^=tab-link-]').forEach((a,j)=>a.className=(i===j?'on':''));
  document.querySelectorAll('[id^=tab-]').forEach(d=>{{if(!d.id.startsWith('tab-link'))d.style.display=(d.id==='tab-'+i?'block':'none')}});
}}
function toggleRow(id){{const r=document.getElementById(id);r.style.display=(r.style.display==='none'?'table-row':'none')}}
async function save(confirmed){{
  const r=await api('/api/admin/content',{{file:FILE,content:DOC,confirm:confirmed}});
  const d=await r.json();
  if(r.status===409){{if(confirm(d.detail+'\\n\\nEnregistrer quand même ?'))return save(true);return}}
  toast(r.ok?'✅ Enregistré':(d.detail||'Erreur'));
}}
async function syncNow(){{
  const r=await fetch('/api/admin/sync?file='+encodeURIComponent(FILE),{{method:'POST'}});
  const d=await r.json();
  if(r.ok){{toast(d.changes+' champ(s) ajouté(s)');setTimeout(()=>location.reload(),800)}}else{{toast(d.detail||'Erreur')}}
}}
function pickImage(path){{PICK={{path:JSON.parse(path)}};openPicker()}}
function pickImageAt(path,i){{PICK={{path:JSON.parse(path),index:i}};openPicker()}}
function openPicker(){{document.getElementById('picker').style.display='block';loadImages()}}
function closePicker(){{document.getElementById('picker').style.display='none'}}
async function loadImages(){{
  const q=document.getElementById('picker-q').value;
  const d=await (await fetch('/api/admin/images?q='+encodeURIComponent(q))).json();
  document.getElementById('picker-grid').innerHTML=d.images.map(p=>
    '<div class="thumb" style="cursor:pointer" onclick="choose(\\''+p+'\\')"><img src="'+p+'"><div class="help" style="padding:4px">'+p+'</div></div>').join('');
}}
function choose(p){{
  closePicker();
  if(PICK.index===undefined)change({{op:'set',path:PICK.path,value:p}});
  else change({{op:'image_set',path:PICK.path,index:PICK.index,value:p}});
}}
function uploadImage(file){{
  if(!file)return;
  const reader=new FileReader();
  reader.onload=async()=>{{
    const r=await api('/api/admin/upload-image',{{filename:file.name,content:reader.result}});
    const d=await r.json();
    if(r.ok){{choose(d.path)}}else{{toast(d.detail||'Erreur upload')}}
  }};
  reader.readAsDataURL(file);
}}"""
    return _page(file, "files", body, script)


def _delete_lang_button(code: str) -> str:
    return f'<button class="btn btn--danger" onclick="delLang(\'{_e(code)}\')">Supprimer</button>'


def render_languages_page(languages: List[Dict[str, Any]]) -> str:
    rows = "".join(
        f'<tr><td style="font-family:monospace">{_e(l["code"])}</td>'
        f'<td>{"⭐ Maître" if l["isMaster"] else ""}</td>'
        f'<td style="text-align:right">{"" if l["isMaster"] else _delete_lang_button(l["code"])}</td></tr>'
        for l in languages
    )
    body = f"""
<div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:20px">
  <h1 style="font-size:18px">🌐 Langues ({len(languages)})</h1>
  <div style="display:flex;gap:6px"><input id="new-lang" type="text" placeholder="en, es, ja…" style="width:140px">
  <button class="btn" onclick="addLang()">+ Ajouter</button></div>
</div>
<div class="group"><table><tr><th>Code</th><th></th><th></th></tr>{rows}</table></div>"""
    script = """
async function addLang(){
  const code=document.getElementById('new-lang').value.trim();
  const r=await fetch('/api/admin/languages',{method:'POST',headers:{'Content-Type':'application/json'},body:JSON.stringify({code})});
  if(r.ok){location.reload()}else{toast((await r.json()).detail||'Erreur')}
}
async function delLang(code){
  if(!confirm('Supprimer la langue '+code+' et tous ses fichiers ?'))return;
  const r=await fetch('/api/admin/languages',{method:'DELETE',headers:{'Content-Type':'application/json'},body:JSON.stringify({code})});
  if(r.ok){location.reload()}else{toast((await r.json()).detail||'Erreur')}
}"""
    return _page("Langues", "languages", body, script)
